from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)
    
    # Form rendering defaults
    FORM_ID: str = "generated-form"
    FORM_ACTION: str = "#"
    FORM_METHOD: str = "POST"
    FORM_CLASS: str = "form"
    SUBMIT_TEXT: str = "Submit"
    FIELD_GROUP_CLASS: str = "field-group"
    ERROR_CLASS: str = "error-msg"
    HINT_CLASS: str = "hint"
    INPUT_ERROR_CLASS: str = "input-error"
    
    class Config:
        env_prefix = "UNIVAL_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
