import os
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Interpreter (external text-generation service)
    GROQ_API_KEY = os.getenv("GROQ_API_KEY")
    INTERPRETER_MODEL = os.getenv("INTERPRETER_MODEL", "llama-3.3-70b-versatile")
    INTERPRETER_TEMPERATURE = float(os.getenv("INTERPRETER_TEMPERATURE", "0.3"))
    INTERPRETER_MAX_TOKENS = int(os.getenv("INTERPRETER_MAX_TOKENS", "2000"))

    # Magic links
    MAGIC_LINK_BASE_URL = os.getenv("MAGIC_LINK_BASE_URL", "http://localhost:3000")
    MAGIC_LINK_HEADER = "X-Magic-Token"
    MAGIC_LINK_DEFAULT_MAX_EDITS_PER_DAY = 50

    # Edit sessions
    EDIT_REQUEST_MAX_LENGTH = 1000
    HISTORY_DEFAULT_LIMIT = 20
    HISTORY_MAX_LIMIT = 100

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///siteedit-dev.db")

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    GROQ_API_KEY = None

config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
