from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_IGNORES: tuple[str, ...] = ("footnoteDefinition", "footnoteReference", "definition", "linkReference")


class ProcessOptions(BaseSettings):
    ignores: list[str] = list(DEFAULT_IGNORES)  # Source types whose subtrees are dropped before conversion
    cascade: bool = True  # Also drop parents emptied by the removal
    max_depth: int | None = None  # None: no recursion guard

    model_config = SettingsConfigDict(
        env_prefix="MDPROSE_",
        extra="ignore",
    )

    @field_validator("ignores")
    @classmethod
    def _empty_ignores_keep_default(cls, value: list[str]) -> list[str]:
        # Non-empty overrides replace the defaults, they are not merged
        return list(value) if value else list(DEFAULT_IGNORES)

    @field_validator("max_depth")
    @classmethod
    def _positive_max_depth(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("max_depth must be a positive integer")
        return value
