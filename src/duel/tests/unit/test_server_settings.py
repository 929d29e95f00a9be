import pytest
from pydantic import ValidationError

from duel.server.settings import DuelServerSettings

_ENV_VARS = (
    "DUEL_DB_PATH",
    "DUEL_LOG_FORMAT",
    "DUEL_LOG_LEVEL",
    "DUEL_CORS_ORIGINS",
    "DUEL_LEADERBOARD_LIMIT",
    "DUEL_MAX_OPEN_GAMES",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDuelServerSettings:
    def test_defaults(self):
        """Unset environment gives the production defaults."""
        settings = DuelServerSettings()
        assert settings.db_path == "data/duel.sqlite3"
        assert settings.log_format == "console"
        assert settings.log_level == "INFO"
        assert settings.cors_origins == ["http://localhost:3000"]
        assert settings.leaderboard_limit == 10
        assert settings.max_open_games == 64

    def test_db_path_override(self, monkeypatch):
        """DUEL_DB_PATH points the server at another database file."""
        monkeypatch.setenv("DUEL_DB_PATH", "/tmp/other.sqlite3")
        assert DuelServerSettings().db_path == "/tmp/other.sqlite3"

    def test_log_settings_override(self, monkeypatch):
        """Log level is accepted in any case; format must be console or json."""
        monkeypatch.setenv("DUEL_LOG_FORMAT", "json")
        monkeypatch.setenv("DUEL_LOG_LEVEL", "debug")
        settings = DuelServerSettings()
        assert settings.log_format == "json"
        assert settings.log_level == "DEBUG"

    def test_unknown_log_format_raises(self, monkeypatch):
        """An unsupported log format is rejected at startup."""
        monkeypatch.setenv("DUEL_LOG_FORMAT", "xml")
        with pytest.raises(ValidationError, match="log_format"):
            DuelServerSettings()

    def test_max_open_games_flows_into_game_settings(self, monkeypatch):
        """The open-game ceiling reaches the rules settings the service uses."""
        monkeypatch.setenv("DUEL_MAX_OPEN_GAMES", "3")
        assert DuelServerSettings().game_settings().max_open_games == 3

    def test_max_open_games_must_be_positive(self, monkeypatch):
        """A zero ceiling would make every creation fail, so it is refused."""
        monkeypatch.setenv("DUEL_MAX_OPEN_GAMES", "0")
        with pytest.raises(ValidationError, match="max_open_games"):
            DuelServerSettings()

    def test_leaderboard_limit_must_be_positive(self, monkeypatch):
        """The default leaderboard size must list at least one player."""
        monkeypatch.setenv("DUEL_LEADERBOARD_LIMIT", "0")
        with pytest.raises(ValidationError, match="leaderboard_limit"):
            DuelServerSettings()

    def test_cors_origins_json_array(self, monkeypatch):
        """CORS origins can be given as a JSON array."""
        monkeypatch.setenv("DUEL_CORS_ORIGINS", '["http://a.com","http://b.com"]')
        assert DuelServerSettings().cors_origins == ["http://a.com", "http://b.com"]

    def test_cors_origins_csv(self, monkeypatch):
        """CORS origins can be given comma-separated, whitespace trimmed."""
        monkeypatch.setenv("DUEL_CORS_ORIGINS", "http://a.com, http://b.com,")
        assert DuelServerSettings().cors_origins == ["http://a.com", "http://b.com"]

    def test_cors_origins_may_be_empty(self, monkeypatch):
        """An empty value disables cross-origin access."""
        monkeypatch.setenv("DUEL_CORS_ORIGINS", "")
        assert DuelServerSettings().cors_origins == []

    def test_cors_origins_init_list(self):
        """Lists passed directly bypass the string parsing."""
        assert DuelServerSettings(cors_origins=["http://c.com"]).cors_origins == ["http://c.com"]

    @pytest.mark.parametrize("value", ["[not json", "[1, 2]"])
    def test_cors_origins_malformed(self, monkeypatch, value):
        """Broken JSON or a JSON value that is not a list of strings is rejected."""
        monkeypatch.setenv("DUEL_CORS_ORIGINS", value)
        with pytest.raises(ValidationError, match="cors_origins"):
            DuelServerSettings()
