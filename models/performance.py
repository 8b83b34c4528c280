from utils.db import mongo
from datetime import datetime, timezone


class Performance:

    @staticmethod
    def collection():
        return mongo.db.performance

    def __init__(self, user_id, reviewer_id, review_date, ratings, comments,
                 period=None, created_at=None):
        self.user_id = user_id
        self.reviewer_id = reviewer_id
        self.review_date = review_date
        self.ratings = ratings  # e.g. {"quality": 4, "teamwork": 5}
        self.comments = comments
        self.period = period
        self.created_at = created_at or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "reviewer_id": self.reviewer_id,
            "review_date": self.review_date,
            "ratings": self.ratings,
            "comments": self.comments,
            "period": self.period,
            "created_at": self.created_at
        }

    def save(self):
        return Performance.collection().insert_one(self.to_dict())

    @staticmethod
    def find_by_user(user_id):
        return list(Performance.collection().find({"user_id": user_id}))
