import hashlib
import secrets
from datetime import datetime, timedelta
from flask import request, current_app

from models import db
from models.session import Session

def _hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()

def _token_from_request():
    auth = request.headers.get("Authorization") or ""
    scheme, _, value = auth.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    cookie_name = current_app.config.get("AUTH_COOKIE_NAME", "reservations_session")
    return request.cookies.get(cookie_name)

def create_session(user_id: int) -> str:
    """
    Creates a server-side session and returns the RAW token.
    The token is handed to the client as a cookie and in the login response;
    only its hash is stored.
    """
    raw_token = secrets.token_urlsafe(32)

    lifetime = current_app.config.get("SESSION_LIFETIME_SECONDS", 86400)
    row = Session(
        user_id=user_id,
        token_hash=_hash_token(raw_token),
        expires_at=datetime.utcnow() + timedelta(seconds=lifetime),
    )
    db.session.add(row)
    db.session.commit()
    return raw_token

def get_session_from_request():
    raw_token = _token_from_request()
    if not raw_token:
        return None

    now = datetime.utcnow()
    sess = Session.query.filter_by(token_hash=_hash_token(raw_token), revoked=False).first()
    if not sess or sess.expires_at <= now:
        return None

    idle_seconds = current_app.config.get("IDLE_TIMEOUT_SECONDS")
    if idle_seconds:
        last_seen = sess.last_seen_at or sess.created_at
        if (last_seen + timedelta(seconds=idle_seconds)) <= now:
            return None

    sess.last_seen_at = now
    db.session.commit()
    return sess

def revoke_current_session() -> bool:
    raw_token = _token_from_request()
    if not raw_token:
        return False
    sess = Session.query.filter_by(token_hash=_hash_token(raw_token)).first()
    if not sess:
        return False
    sess.revoked = True
    db.session.commit()
    return True
