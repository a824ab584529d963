import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


class ConfigError(RuntimeError):
    pass


# Nepal, Khumbu region
DEFAULT_MAP_CENTER = (86.8525, 28.0021)


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, built once at startup and handed to the app."""

    secret_key: str
    database_url: str
    mapbox_token: str
    admin_email: str = ""
    google_client_id: str = ""
    google_client_secret: str = ""
    brave_search_api_key: str = ""
    brave_search_url: str = "https://api.search.brave.com/res/v1/web/search"
    search_timeout: float = 10.0
    token_max_age: int = 7 * 24 * 3600
    ga_measurement_id: str = ""
    mapbox_style: str = "mapbox://styles/mapbox/outdoors-v12"
    map_center: tuple = field(default=DEFAULT_MAP_CENTER)
    map_zoom: int = 11
    map_pitch: int = 45
    map_bearing: int = -30
    testing: bool = False

    @classmethod
    def from_env(cls):
        load_dotenv()

        mapbox_token = os.getenv("MAPBOX_TOKEN")
        if not mapbox_token:
            raise ConfigError("Missing MAPBOX_TOKEN. Please add it to your environment variables.")

        return cls(
            secret_key=os.getenv("SECRET_KEY", "secret_key"),
            database_url=os.getenv("DATABASE_URL", "sqlite:///trekking.db"),
            mapbox_token=mapbox_token,
            admin_email=os.getenv("ADMIN_EMAIL", ""),
            google_client_id=os.getenv("GOOGLE_CLIENT_ID", ""),
            google_client_secret=os.getenv("GOOGLE_CLIENT_SECRET", ""),
            brave_search_api_key=os.getenv("BRAVE_SEARCH_API_KEY", ""),
            brave_search_url=os.getenv("BRAVE_SEARCH_URL", cls.brave_search_url),
            search_timeout=float(os.getenv("SEARCH_TIMEOUT", "10")),
            token_max_age=int(os.getenv("TOKEN_MAX_AGE", str(7 * 24 * 3600))),
            ga_measurement_id=os.getenv("GA_MEASUREMENT_ID", ""),
            mapbox_style=os.getenv("MAPBOX_STYLE", cls.mapbox_style),
        )

    @property
    def map_config(self):
        return {
            "token": self.mapbox_token,
            "style": self.mapbox_style,
            "center": list(self.map_center),
            "zoom": self.map_zoom,
            "pitch": self.map_pitch,
            "bearing": self.map_bearing,
        }
