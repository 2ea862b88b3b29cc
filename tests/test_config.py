"""
Tests for Configuration
=======================
Tests for namegen/config.py and namegen/settings.py.
"""

import pytest
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namegen.config import (
    PATTERN_PRESETS,
    Config,
    get_config,
    get_pattern,
    list_presets,
    load_env,
)
from namegen.generator import Generator, Status
from namegen.settings import PROJECT_ROOT, get_setting, load_app_config, resolve_path

ENV_KEYS = ('NAMEGEN_TOKENS', 'NAMEGEN_MAX_DEPTH', 'NAMEGEN_PATTERN', 'NAMEGEN_CONFIG')


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No NAMEGEN_* variables and no .env in the working directory."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestPresets:
    """Tests for pattern presets."""

    def test_get_pattern(self):
        """Test preset lookup."""
        assert get_pattern("dim") == "c(dim)"
        assert get_pattern("either") == "<(C!i)|(v!M)>"

    def test_unknown_preset(self):
        """Test unknown preset raises ValueError listing the options."""
        with pytest.raises(ValueError) as exc_info:
            get_pattern("nope")
        assert "fantasy" in str(exc_info.value)

    def test_list_presets(self):
        """Test preset listing."""
        presets = list_presets()
        assert set(presets) == set(PATTERN_PRESETS)
        for info in presets.values():
            assert info["pattern"]
            assert info["description"]

    def test_presets_are_valid(self):
        """Test every preset is a well-formed pattern."""
        gen = Generator()
        for name, info in PATTERN_PRESETS.items():
            assert gen.validate(info["pattern"]) is Status.SUCCESS, name


class TestSettings:
    """Tests for app.yaml settings."""

    def test_app_config_loads(self, clean_env):
        """Test the shipped settings file is a mapping."""
        assert isinstance(load_app_config(), dict)

    def test_get_setting(self, clean_env):
        """Test dotted lookup."""
        assert get_setting('generator.max_depth') == 32
        assert get_setting('generator.default_pattern') == "!ssV'!i"

    def test_get_setting_default(self, clean_env):
        """Test missing and null settings fall back to the default."""
        assert get_setting('generator.nope', 5) == 5
        assert get_setting('tokens.path', 'fallback') == 'fallback'

    def test_config_override_file(self, clean_env, monkeypatch):
        """Test NAMEGEN_CONFIG points at another settings file."""
        alt = clean_env / "alt.yaml"
        alt.write_text("generator:\n  max_depth: 7\n", encoding='utf-8')
        monkeypatch.setenv('NAMEGEN_CONFIG', str(alt))
        assert get_setting('generator.max_depth') == 7

    def test_resolve_path(self, tmp_path):
        """Test relative and absolute path resolution."""
        assert resolve_path("x.json") == (PROJECT_ROOT / "x.json").resolve()
        assert resolve_path(str(tmp_path / "y.json")) == tmp_path / "y.json"
        with pytest.raises(ValueError):
            resolve_path(None)


class TestConfig:
    """Tests for get_config and .env handling."""

    def test_defaults(self, clean_env):
        """Test configuration from the shipped settings."""
        cfg = get_config()
        assert isinstance(cfg, Config)
        assert cfg.max_depth == 32
        assert cfg.default_pattern == "!ssV'!i"
        assert cfg.default_count == 10
        assert cfg.tokens_path is None
        assert not cfg.has_tokens_file

    def test_environment_overrides(self, clean_env, monkeypatch):
        """Test NAMEGEN_* variables override settings."""
        monkeypatch.setenv('NAMEGEN_MAX_DEPTH', '5')
        monkeypatch.setenv('NAMEGEN_PATTERN', '(abc)')
        monkeypatch.setenv('NAMEGEN_TOKENS', 'tokens.json')
        cfg = get_config()
        assert cfg.max_depth == 5
        assert cfg.default_pattern == '(abc)'
        assert cfg.tokens_path == (clean_env / 'tokens.json').resolve()
        assert cfg.has_tokens_file

    def test_invalid_max_depth(self, clean_env, monkeypatch):
        """Test non-numeric or non-positive depth is rejected."""
        monkeypatch.setenv('NAMEGEN_MAX_DEPTH', 'deep')
        with pytest.raises(ValueError):
            get_config()
        monkeypatch.setenv('NAMEGEN_MAX_DEPTH', '0')
        with pytest.raises(ValueError):
            get_config()

    def test_load_env(self, tmp_path):
        """Test .env parsing skips comments and strips quotes."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# comment\nNAMEGEN_PATTERN='(xyz)'\nNAMEGEN_MAX_DEPTH = 9\nnoise\n",
            encoding='utf-8',
        )
        env = load_env(env_file)
        assert env == {'NAMEGEN_PATTERN': '(xyz)', 'NAMEGEN_MAX_DEPTH': '9'}

    def test_load_env_missing(self, tmp_path):
        """Test a missing .env gives no values."""
        assert load_env(tmp_path / ".env") == {}

    def test_env_file_used(self, clean_env):
        """Test .env values feed the configuration."""
        env_file = clean_env / ".env"
        env_file.write_text("NAMEGEN_PATTERN=(xyz)\n", encoding='utf-8')
        assert get_config(env_file).default_pattern == '(xyz)'

    def test_environment_beats_env_file(self, clean_env, monkeypatch):
        """Test process environment wins over .env."""
        env_file = clean_env / ".env"
        env_file.write_text("NAMEGEN_PATTERN=(xyz)\n", encoding='utf-8')
        monkeypatch.setenv('NAMEGEN_PATTERN', '(env)')
        assert get_config(env_file).default_pattern == '(env)'
