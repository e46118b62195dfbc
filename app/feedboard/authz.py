from app.feedboard.models import User


def user_has_access(user: User | None) -> bool:
    return bool(user and user.has_access)


def user_manages_board(user: User | None, board_id: str | None) -> bool:
    if not user or not board_id:
        return False
    return str(board_id) in user.boards
