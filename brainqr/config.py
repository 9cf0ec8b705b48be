from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Series-type master config
    series_type_url: str = (
        "http://apollo2.humanbrain.in:8000/masterconfig/Seriestype/?format=json"
    )
    series_type_username: str = "admin"
    series_type_password: str = "admin"
    series_type_timeout: float = 10.0

    # QR rendering
    qr_size: int = 200

    # Terminal front end
    generator_url: str = "http://127.0.0.1:8000"

    # Logging
    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
