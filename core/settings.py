from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./quick_edit.db"

    # Capability a field requires when its definition does not name one
    QUICK_EDIT_DEFAULT_CAPABILITY: str = "edit_posts"

    # Request key the list screen sends along with an inline (quick) edit
    QUICK_EDIT_INLINE_FLAG: str = "_inline_edit"

    # Delay before the populate script looks up the freshly built edit row
    QUICK_EDIT_POPULATE_DELAY_MS: int = 50

    # Comma separated modules exposing register(registry), imported at startup
    QUICK_EDIT_FIELD_MODULES: str = ""

    # Capabilities granted to the acting user when the host does not provide them
    QUICK_EDIT_CAPABILITIES: str = "edit_posts"

    # Sentry error tracking
    SENTRY_DSN: str | None = None
    SENTRY_ENVIRONMENT: str = "development"

    DEBUG: bool = False

    @property
    def field_modules(self) -> list[str]:
        return [name.strip() for name in self.QUICK_EDIT_FIELD_MODULES.split(",") if name.strip()]

    @property
    def capabilities(self) -> set[str]:
        return {cap.strip() for cap in self.QUICK_EDIT_CAPABILITIES.split(",") if cap.strip()}

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
