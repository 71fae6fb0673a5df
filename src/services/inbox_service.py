import logging

from extensions import db
from src.models import Message, Review
from src.services import cache_service as cache
from src.services.db_context import db_context


logger = logging.getLogger("inbox_service")


# -------------------------------
# ✉️ CONTACT MESSAGES
# -------------------------------

def list_messages(unread_only: bool = False):
    with db_context("list_messages"):
        query = Message.query
        if unread_only:
            query = query.filter(Message.is_read.is_(False))
        return query.order_by(Message.created_at.desc(), Message.id.desc()).all()


def get_message(message_id: int):
    with db_context("get_message"):
        return db.session.get(Message, message_id)


def create_message(data: dict) -> Message:
    with db_context("create_message") as session:
        msg = Message(**data, is_read=False)
        session.add(msg)
    logger.info(f"[create_message] New message {msg.id} from {msg.email}")
    cache.invalidate(cache.STATS)
    return msg


def mark_message_as_read(message_id: int):
    """Flag a single message as read. Other messages are untouched."""
    with db_context("mark_message_as_read") as session:
        msg = session.get(Message, message_id)
        if msg is None:
            return None
        msg.is_read = True
    logger.info(f"[mark_message_as_read] Marked message {message_id} read")
    cache.invalidate(cache.STATS)
    return msg


def mark_all_messages_as_read() -> int:
    with db_context("mark_all_messages_as_read"):
        updated = (
            Message.query
            .filter(Message.is_read.is_(False))
            .update({Message.is_read: True})
        )
    logger.info(f"[mark_all_messages_as_read] Marked {updated} messages read")
    cache.invalidate(cache.STATS)
    return updated


def delete_message(message_id: int) -> bool:
    with db_context("delete_message") as session:
        msg = session.get(Message, message_id)
        if msg is None:
            return False
        session.delete(msg)
    logger.info(f"[delete_message] Deleted message {message_id}")
    cache.invalidate(cache.STATS)
    return True


# -------------------------------
# ⭐ REVIEWS
# -------------------------------

def list_approved_reviews():
    with db_context("list_approved_reviews"):
        return (
            Review.query
            .filter(Review.is_approved.is_(True))
            .order_by(Review.created_at.desc(), Review.id.desc())
            .all()
        )


def create_review(data: dict) -> Review:
    """New reviews wait for moderation before they are shown."""
    with db_context("create_review") as session:
        review = Review(**data, is_approved=False)
        session.add(review)
    logger.info(f"[create_review] New review {review.id} ({review.rating}/5)")
    return review


def approve_review(review_id: int):
    with db_context("approve_review") as session:
        review = session.get(Review, review_id)
        if review is None:
            return None
        review.is_approved = True
    logger.info(f"[approve_review] Approved review {review_id}")
    return review
