from __future__ import annotations

from flask import Blueprint, jsonify, request

from app.feedboard.auth import auth
from app.feedboard.db import db_session
from app.feedboard.modules.votes.service import cast_vote, retract_vote

bp = Blueprint("votes", __name__)


@bp.post("/vote")
def vote_create():
    s = db_session()
    votes = cast_vote(s, (request.args.get("postId") or "").strip(), auth())
    s.commit()
    return jsonify({"message": "Voted", "votesCounter": votes})


@bp.delete("/vote")
def vote_delete():
    s = db_session()
    votes = retract_vote(s, (request.args.get("postId") or "").strip(), auth())
    s.commit()
    return jsonify({"message": "Vote removed", "votesCounter": votes})
