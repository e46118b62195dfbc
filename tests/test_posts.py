"""Tests for creating and deleting posts (/api/post)."""
import pytest

from app.feedboard.auth import AuthSession
from app.feedboard.db import session_scope
from app.feedboard.errors import Forbidden, NotFound, Unauthorized, ValidationError
from app.feedboard.models import AuditEvent, User
from app.feedboard.modules.posts.models import Post
from app.feedboard.modules.posts.service import create_post, delete_post


def _seed_user(app, *, user_id="u1", has_access=True, boards=("b1",)):
    with session_scope(app) as s:
        u = User(id=user_id, email=f"{user_id}@example.com", has_access=has_access)
        for board_id in boards:
            u.grant_board(board_id)
        s.add(u)


def _seed_post(app, *, board_id="b1", title="Dark mode", votes=0):
    with session_scope(app) as s:
        p = Post(title=title, description="", board_id=board_id, votes_counter=votes)
        s.add(p)
        s.flush()
        return p.id


def _login(client, user_id="u1"):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id


def _post_count(app):
    with session_scope(app) as s:
        return s.query(Post).count()


# ---------- Create ----------
def test_create_anonymous(client):
    r = client.post("/api/post?boardId=b1", json={"title": "idea", "description": "d"})
    assert r.status_code == 200
    body = r.json
    assert body["boardId"] == "b1"
    assert body["userId"] is None
    assert body["votesCounter"] == 0
    assert body["title"] == "idea"
    assert body["description"] == "d"
    assert body["_id"]


def test_create_signed_in_records_author(client):
    _login(client, "u42")
    r = client.post("/api/post?boardId=b1", json={"title": "idea", "description": "d"})
    assert r.status_code == 200
    assert r.json["userId"] == "u42"


def test_create_masks_profanity(client):
    r = client.post("/api/post?boardId=b1", json={"title": "this shit is slow", "description": "fix this shit cache"})
    assert r.status_code == 200
    assert r.json["title"] == "this **** is slow"
    assert r.json["description"] == "fix this **** cache"


@pytest.mark.parametrize("title", [None, "", "   ", "shit", "shit fuck"])
def test_create_rejects_empty_or_filtered_title(client, app, title):
    r = client.post("/api/post?boardId=b1", json={"title": title, "description": "d"})
    assert r.status_code == 400
    assert r.json == {"error": "Title is required"}
    assert _post_count(app) == 0


def test_create_allows_empty_description(client):
    r = client.post("/api/post?boardId=b1", json={"title": "idea"})
    assert r.status_code == 200
    assert r.json["description"] == ""


def test_create_requires_board_id(client):
    r = client.post("/api/post", json={"title": "idea"})
    assert r.status_code == 400
    assert r.json == {"error": "boardId is required"}


@pytest.mark.parametrize("body", [["idea"], "idea", 42])
def test_create_rejects_non_object_body(client, app, body):
    r = client.post("/api/post?boardId=b1", json=body)
    assert r.status_code == 400
    assert r.json == {"error": "Request body must be a JSON object"}
    assert _post_count(app) == 0


def test_create_rejects_non_text_title(client):
    r = client.post("/api/post?boardId=b1", json={"title": ["idea"]})
    assert r.status_code == 400
    assert r.json == {"error": "Title must be text"}


def test_create_enforces_length_limits(client, app):
    r = client.post("/api/post?boardId=b1", json={"title": "x" * 101})
    assert r.status_code == 400
    assert r.json == {"error": "Title must be at most 100 characters"}

    r = client.post("/api/post?boardId=b1", json={"title": "idea", "description": "d" * 1001})
    assert r.status_code == 400
    assert r.json == {"error": "Description must be at most 1000 characters"}
    assert _post_count(app) == 0

    r = client.post("/api/post?boardId=b1", json={"title": "x" * 100, "description": "d" * 1000})
    assert r.status_code == 200


def test_create_records_audit_event(app):
    with session_scope(app) as s:
        post = create_post(s, title="idea", description=None, board_id="b1", auth_session=AuthSession(user_id="u1"))
        post_id = post.id
    with session_scope(app) as s:
        ev = s.query(AuditEvent).filter(AuditEvent.action == "post.create").one()
        assert ev.entity_id == post_id
        assert ev.actor_user_id == "u1"


# ---------- Delete ----------
def test_delete_requires_post_id(client):
    _login(client)
    r = client.delete("/api/post")
    assert r.status_code == 400
    assert r.json == {"error": "postId is required"}


def test_delete_requires_session(client, app):
    post_id = _seed_post(app)
    r = client.delete(f"/api/post?postId={post_id}")
    assert r.status_code == 401
    assert _post_count(app) == 1


def test_delete_requires_subscription(client, app):
    _seed_user(app, has_access=False, boards=("b1",))
    post_id = _seed_post(app)
    _login(client)
    r = client.delete(f"/api/post?postId={post_id}")
    assert r.status_code == 403
    assert r.json == {"error": "You need to subscribe to delete a post"}
    assert _post_count(app) == 1


def test_delete_not_found(client, app):
    _seed_user(app)
    _login(client)
    r = client.delete("/api/post?postId=missing")
    assert r.status_code == 404
    assert r.json == {"error": "Post not found"}


def test_delete_requires_board_access(client, app):
    _seed_user(app, boards=("b2",))
    post_id = _seed_post(app, board_id="b1")
    _login(client)
    r = client.delete(f"/api/post?postId={post_id}")
    assert r.status_code == 401
    assert r.json == {"error": "You don't have access to delete this post"}
    assert _post_count(app) == 1


def test_delete_ok_then_gone(client, app):
    _seed_user(app)
    post_id = _seed_post(app)
    other_id = _seed_post(app, title="Keep me")
    _login(client)

    r = client.delete(f"/api/post?postId={post_id}")
    assert r.status_code == 200
    assert r.json == {"message": "Post deleted"}

    r = client.delete(f"/api/post?postId={post_id}")
    assert r.status_code == 404

    with session_scope(app) as s:
        assert s.get(Post, post_id) is None
        assert s.get(Post, other_id) is not None
        assert s.query(AuditEvent).filter(AuditEvent.action == "post.delete").count() == 1


def test_delete_any_post_on_managed_board(client, app):
    _seed_user(app)
    with session_scope(app) as s:
        p = Post(title="Someone else's", description="", board_id="b1", user_id="someone-else")
        s.add(p)
        s.flush()
        post_id = p.id
    _login(client)
    r = client.delete(f"/api/post?postId={post_id}")
    assert r.status_code == 200


def test_delete_service_order_of_checks(app):
    _seed_user(app, has_access=False, boards=())
    with session_scope(app) as s:
        with pytest.raises(ValidationError):
            delete_post(s, None, None)
        with pytest.raises(Unauthorized):
            delete_post(s, "anything", None)
        with pytest.raises(Unauthorized):
            delete_post(s, "anything", AuthSession(user_id="ghost"))
        # subscription is checked before the post lookup
        with pytest.raises(Forbidden):
            delete_post(s, "missing", AuthSession(user_id="u1"))

    _seed_user(app, user_id="u2", has_access=True, boards=())
    with session_scope(app) as s:
        with pytest.raises(NotFound):
            delete_post(s, "missing", AuthSession(user_id="u2"))


# ---------- Error handling ----------
def test_unexpected_error_does_not_leak(client, monkeypatch):
    import app.feedboard.modules.posts.api as posts_api

    def _boom(*args, **kwargs):
        raise RuntimeError("connection string postgres://secret@db")

    monkeypatch.setattr(posts_api, "create_post", _boom)
    r = client.post("/api/post?boardId=b1", json={"title": "idea"})
    assert r.status_code == 500
    assert r.json == {"error": "Internal server error"}
    assert b"secret" not in r.data


def test_api_http_errors_are_json(client):
    r = client.put("/api/post?boardId=b1", json={"title": "idea"})
    assert r.status_code == 405
    assert r.json == {"error": "Method Not Allowed"}


def test_api_body_too_large_is_json(client):
    r = client.post("/api/post?boardId=b1", data=b"x" * (1024 * 1024 + 1), content_type="application/json")
    assert r.status_code == 413
    assert r.json == {"error": "Request Entity Too Large"}


def test_lost_database_is_reported_unavailable(client, app, monkeypatch):
    import app.feedboard.modules.posts.api as posts_api
    from sqlalchemy.exc import OperationalError

    def _db_gone(*args, **kwargs):
        raise OperationalError("INSERT INTO posts", {}, Exception("server closed the connection unexpectedly"))

    monkeypatch.setattr(posts_api, "create_post", _db_gone)
    r = client.post("/api/post?boardId=b1", json={"title": "idea"})
    assert r.status_code == 503
    assert r.json == {"error": "Database unavailable"}
    assert b"server closed" not in r.data
    # the next request checks the connection again
    assert app.extensions["sqlalchemy_connected"] is False
