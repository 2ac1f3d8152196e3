import pytest
from src.prediction.domain.entities import Location, TimeContext, WeatherContext

@pytest.fixture
def locations():
    return [
        Location(name="Av. Larco y Av. Benavides", latitude=-12.1254, longitude=-77.0297),
        Location(name="Ovalo Gutierrez", latitude=-12.1096, longitude=-77.0367),
        Location(name="Av. Arequipa y Av. Angamos", latitude=-12.1118, longitude=-77.0319),
    ]

@pytest.fixture
def weather():
    return WeatherContext(temperature=19.5, precipitation=0.2, rain=0.1, wind_speed=12.0)

@pytest.fixture
def time_context():
    return TimeContext(hour=8, day=1)
