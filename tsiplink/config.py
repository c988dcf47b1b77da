from functools import lru_cache

from pydantic import Field
from pydantic_settings import SettingsConfigDict, BaseSettings


class DecoderSettings(BaseSettings):
    # Diagnostics only; parsing does not depend on these.
    verbose: bool = Field(True, validation_alias="TSIP_VERBOSE")
    debug: bool = Field(False, validation_alias="TSIP_DEBUG")

    logger_name: str = Field("tsiplink", validation_alias="TSIP_LOGGER_NAME")
    log_ring_size: int = Field(200, validation_alias="TSIP_LOG_RING_SIZE")

    queue_max_size: int = Field(1024, validation_alias="TSIP_QUEUE_MAX_SIZE")
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")


@lru_cache
def get_settings() -> DecoderSettings:
    return DecoderSettings()
