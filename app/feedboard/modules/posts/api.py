from __future__ import annotations

from flask import Blueprint, jsonify, request

from app.feedboard.auth import auth
from app.feedboard.db import db_session
from app.feedboard.errors import ValidationError
from app.feedboard.modules.posts.service import create_post, delete_post

bp = Blueprint("posts", __name__)


@bp.post("/post")
def post_create():
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    s = db_session()
    post = create_post(
        s,
        title=payload.get("title"),
        description=payload.get("description"),
        board_id=request.args.get("boardId"),
        auth_session=auth(),
    )
    s.commit()
    return jsonify(post.to_dict())


@bp.delete("/post")
def post_delete():
    post_id = (request.args.get("postId") or "").strip()
    s = db_session()
    delete_post(s, post_id, auth())
    s.commit()
    return jsonify({"message": "Post deleted"})
