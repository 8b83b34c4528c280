from decouple import config


class Config:
    SECRET_KEY = config("SECRET_KEY", default="change-me")
    MONGO_URI = config("MONGO_URI", default="mongodb://localhost:27017/HRManagement")

    LOG_LEVEL = config("LOG_LEVEL", default="INFO")
    LOG_FORMAT = config("LOG_FORMAT", default="text")  # "text" | "json"

    # Bootstrap admin account, written once by `flask init-db`
    ADMIN_EMAIL = config("ADMIN_EMAIL", default="admin@edecs.com")
    ADMIN_PASSWORD = config("ADMIN_PASSWORD", default="Admin@123")
    ADMIN_DISPLAY_NAME = config("ADMIN_DISPLAY_NAME", default="System Admin")

    AGGREGATE_MAX_WORKERS = config("AGGREGATE_MAX_WORKERS", default=5, cast=int)
    ACTIVITY_LOG_WORKERS = config("ACTIVITY_LOG_WORKERS", default=2, cast=int)

    DEFAULT_WORK_START = config("DEFAULT_WORK_START", default="09:00")
    DEFAULT_WORK_END = config("DEFAULT_WORK_END", default="17:00")

    TESTING = False
    DEBUG = False


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = "DEBUG"


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "testing"
    MONGO_URI = "mongodb://localhost:27017/HRManagementTest"
    LOG_LEVEL = "WARNING"
