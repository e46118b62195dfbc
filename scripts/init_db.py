import os
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running as a script (Windows-friendly).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scripts._db_utils import script_session  # noqa: E402
from app.feedboard.models import Base, User  # noqa: E402
from app.feedboard.modules.boards.models import Board  # noqa: E402


def create_tables(*, database_url: str | None = None) -> None:
    """Create missing tables directly from the models (local dev; prod uses alembic)."""
    from scripts._db_utils import create_script_engine

    db_url = (database_url or os.environ.get("DATABASE_URL") or "sqlite:///feedboard.db").strip()
    engine = create_script_engine(db_url)
    try:
        Base.metadata.create_all(bind=engine)
    finally:
        engine.dispose()


def seed_only(*, database_url: str | None = None) -> None:
    """
    Seed an owner account and its board in an idempotent way.
    Does NOT change an existing owner's subscription flag.
    """
    owner_email = (os.environ.get("OWNER_EMAIL") or "owner@feedboard.local").strip().lower()
    board_name = (os.environ.get("BOARD_NAME") or "Feature requests").strip()

    db_url = (database_url or os.environ.get("DATABASE_URL") or "sqlite:///feedboard.db").strip()

    with script_session(db_url) as s:
        owner = s.query(User).filter(User.email == owner_email).one_or_none()
        if not owner:
            owner = User(email=owner_email, name="Board owner", has_access=True)
            s.add(owner)
            s.flush()

        board = s.query(Board).filter(Board.owner_user_id == owner.id, Board.name == board_name).one_or_none()
        if not board:
            board = Board(name=board_name, owner_user_id=owner.id)
            s.add(board)
            s.flush()
        owner.grant_board(board.id)
        board_id = board.id

    print("Initialized database (seed_only).")
    print(f"Owner email: {owner_email}")
    print(f"Board: /b/{board_id}")


def main() -> None:
    create_tables(database_url=None)
    seed_only(database_url=None)


if __name__ == "__main__":
    main()
