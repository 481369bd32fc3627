import app.main as cli
from weather.view import WeatherView

PAYLOADS = {
    "Irvine, USA": {
        "main": {"temp": 300, "temp_min": 295, "temp_max": 305},
        "weather": [{"main": "Clear", "icon": "01d"}],
        "name": "Irvine",
        "sys": {"country": "US"},
    },
    "Oslo": {
        "main": {"temp": 270, "temp_min": 268, "temp_max": 272},
        "weather": [{"main": "Snow", "icon": "13d"}],
        "name": "Oslo",
        "sys": {"country": "NO"},
    },
}


class StubProvider:
    def __init__(self) -> None:
        self.queries: list[str] = []

    def fetch_current(self, query: str) -> dict:
        self.queries.append(query)
        return PAYLOADS.get(query, {"cod": "404", "message": "city not found"})


def _feed_inputs(monkeypatch, values):
    answers = iter(values)

    def fake_input(_prompt=""):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


def test_cli_prints_default_then_searched_location(monkeypatch, capsys):
    provider = StubProvider()
    _feed_inputs(monkeypatch, ["Oslo", "quit"])

    cli.main(WeatherView(provider))

    out = capsys.readouterr().out
    assert "80° F  Irvine" in out
    assert "Snow" in out
    assert "Norway" in out
    assert "Kingdom of Norway" not in out
    assert "Goodbye!" in out
    assert provider.queries == ["Irvine, USA", "Oslo"]


def test_cli_skips_empty_input_and_exits_on_eof(monkeypatch, capsys):
    provider = StubProvider()
    _feed_inputs(monkeypatch, [""])

    cli.main(WeatherView(provider))

    out = capsys.readouterr().out
    assert provider.queries == ["Irvine, USA"]
    assert "Exiting." in out


def test_build_view_uses_environment_defaults(monkeypatch):
    monkeypatch.setenv("DEFAULT_LOCATION", "Lisbon")
    view = cli.build_view(StubProvider())

    assert view.committed == "Lisbon"


def test_build_provider_warns_without_api_key(monkeypatch, caplog):
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)

    provider = cli.build_provider()

    assert "OPENWEATHER_API_KEY" in caplog.text
    assert "appid=" in provider.request_url("Irvine")
