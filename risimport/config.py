from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Bytes inspected by detect_format(); the first 4 KB is always enough
    sniff_bytes: int = 4096
    # Separator used when several abstract or comment values are joined
    line_separator: str = "\n"

    model_config = {
        "env_prefix": "RISIMPORT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
