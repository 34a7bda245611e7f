"""
Unit tests for configuration manager
"""

import pytest
import json

from utils.config_manager import UnifiedConfigManager, DEFAULT_QUOTES
from utils.exceptions import ConfigurationError


@pytest.mark.unit
class TestConfigManager:
    """Test cases for UnifiedConfigManager class"""

    @pytest.fixture
    def config_dir(self, tmp_path):
        """Config directory split across files like the shipped one"""
        (tmp_path / "api.json").write_text(json.dumps({
            "api_config": {"host": "127.0.0.1", "port": 9000, "cors_origins": ["http://localhost:3000"]}
        }), encoding="utf-8")
        (tmp_path / "quiz.json").write_text(json.dumps({
            "quiz_config": {
                "timezone": "Asia/Seoul",
                "today_quote_id": "q1",
                "fill_max_length": 10,
                "quotes": [{
                    "id": "q1", "template": "(A) and (B)", "author": "someone",
                    "answerA": "a", "answerB": "b"
                }]
            }
        }, ensure_ascii=False), encoding="utf-8")
        return tmp_path

    @pytest.fixture
    def config_manager(self, config_dir, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        return UnifiedConfigManager(str(config_dir))

    def test_files_are_merged(self, config_manager):
        assert "api_config" in config_manager
        assert "quiz_config" in config_manager
        assert config_manager.get_nested("api_config.host") == "127.0.0.1"
        assert config_manager.get_nested("api_config.missing", "default") == "default"

    def test_api_config(self, config_manager):
        api_config = config_manager.get_api_config()
        assert api_config.host == "127.0.0.1"
        assert api_config.port == 9000
        assert api_config.reload is False
        assert api_config.cors_origins == ["http://localhost:3000"]

    def test_port_env_overrides_file(self, config_dir, monkeypatch):
        monkeypatch.setenv("PORT", "8123")
        manager = UnifiedConfigManager(str(config_dir))
        assert manager.get_api_config().port == 8123

    def test_quiz_config(self, config_manager):
        quiz_config = config_manager.get_quiz_config()
        assert quiz_config.timezone == "Asia/Seoul"
        assert quiz_config.today_quote_id == "q1"
        assert quiz_config.fill_min_length == 1
        assert quiz_config.fill_max_length == 10
        assert quiz_config.evict_stale_locks is True
        assert quiz_config.quotes[0]["id"] == "q1"

    def test_quiz_config_defaults(self, tmp_path):
        (tmp_path / "empty.json").write_text("{}", encoding="utf-8")
        quiz_config = UnifiedConfigManager(str(tmp_path)).get_quiz_config()
        assert quiz_config.timezone is None
        assert quiz_config.today_quote_id == "2025-09-08"
        assert quiz_config.quotes == DEFAULT_QUOTES
        assert quiz_config.quotes is not DEFAULT_QUOTES

    def test_api_config_defaults_when_section_missing(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        (tmp_path / "empty.json").write_text("{}", encoding="utf-8")
        api_config = UnifiedConfigManager(str(tmp_path)).get_api_config()
        assert api_config.host == "0.0.0.0"
        assert api_config.port == 8000
        assert api_config.cors_origins == ["*"]

    def test_logging_config_defaults(self, config_manager):
        logging_config = config_manager.get_logging_config()
        assert logging_config.level == "INFO"
        assert logging_config.file_config.filename == "quiz.log"
        assert logging_config.console_config.enabled is True
        assert logging_config.modules == {}

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ConfigurationError):
            UnifiedConfigManager(str(tmp_path / "nope"))

    def test_directory_without_json(self, tmp_path):
        with pytest.raises(ConfigurationError):
            UnifiedConfigManager(str(tmp_path))

    def test_invalid_json(self, tmp_path):
        (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            UnifiedConfigManager(str(tmp_path))
        assert "broken.json" in exc_info.value.message

    def test_shipped_config_loads(self, monkeypatch):
        """The config/ directory in the repo is valid and self-consistent"""
        monkeypatch.delenv("PORT", raising=False)
        manager = UnifiedConfigManager()
        quiz_config = manager.get_quiz_config()
        assert quiz_config.today_quote_id in {q["id"] for q in quiz_config.quotes}
        assert manager.get_api_config().port == 8000
