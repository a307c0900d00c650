# ABOUTME: Pydantic BaseModels for weather snapshots, city candidates, and search history.
# ABOUTME: Also defines the Open-Meteo wire models that decode into the domain types.

from datetime import datetime, timezone
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

MAX_HISTORY_ENTRIES = 20


class Coordinates(BaseModel):
    """Geographic position in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class WeatherSnapshot(BaseModel):
    """Current conditions decoded from a forecast response."""

    model_config = ConfigDict(frozen=True)

    temperature: float
    condition_code: int
    wind_speed_kmh: float
    humidity_pct: int | None = None
    observed_at: datetime


class CityCandidate(BaseModel):
    """A geocoding match offered to the user while searching."""

    model_config = ConfigDict(frozen=True)

    name: str
    coordinates: Coordinates
    country: str | None = None
    region: str | None = None

    @property
    def display_name(self) -> str:
        return ", ".join(part for part in (self.name, self.region, self.country) if part)


class HistoryEntry(BaseModel):
    """A city the user looked up from search. Identity is the id alone."""

    id: UUID = Field(default_factory=uuid4)
    city_name: str
    coordinates: Coordinates
    searched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def __eq__(self, other):
        if not isinstance(other, HistoryEntry):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)


class CurrentWeather(BaseModel):
    """The `current` block of an Open-Meteo forecast response."""

    time: datetime
    temperature_2m: float
    weather_code: int
    wind_speed_10m: float
    relative_humidity_2m: int | None = None


class WeatherResponse(BaseModel):
    """Parsed response from the Open-Meteo forecast endpoint."""

    latitude: float
    longitude: float
    timezone: str
    current: CurrentWeather

    def to_snapshot(self) -> WeatherSnapshot:
        return WeatherSnapshot(
            temperature=self.current.temperature_2m,
            condition_code=self.current.weather_code,
            wind_speed_kmh=self.current.wind_speed_10m,
            humidity_pct=self.current.relative_humidity_2m,
            observed_at=self.current.time,
        )


class GeocodingResult(BaseModel):
    """One match from the Open-Meteo geocoding endpoint."""

    name: str
    latitude: float
    longitude: float
    country: str | None = None
    admin1: str | None = None

    def to_candidate(self) -> CityCandidate:
        return CityCandidate(
            name=self.name,
            coordinates=Coordinates(latitude=self.latitude, longitude=self.longitude),
            country=self.country,
            region=self.admin1,
        )


class GeocodingResponse(BaseModel):
    """Parsed response from the geocoding endpoint. `results` is omitted when nothing matches."""

    results: list[GeocodingResult] | None = None
