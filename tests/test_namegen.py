"""
Tests for the NameGen Facade
============================
Tests for the main NameGen class and module-level helpers.
"""

import json
import pytest
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import namegen
from namegen import Config, LoadError, NameGen, Status, TokenTable


@pytest.fixture
def cfg():
    return Config(default_pattern="(abc)", default_count=3)


class TestNameGenInit:
    """Tests for NameGen initialization."""

    def test_init_default(self, monkeypatch, tmp_path):
        """Test default initialization uses built-in tokens."""
        for key in ('NAMEGEN_TOKENS', 'NAMEGEN_MAX_DEPTH', 'NAMEGEN_PATTERN', 'NAMEGEN_CONFIG'):
            monkeypatch.delenv(key, raising=False)
        monkeypatch.chdir(tmp_path)
        ng = NameGen()
        assert 's' in ng.tokens
        assert ng.config.max_depth == 32

    def test_init_with_tokens(self, cfg):
        """Test an explicit table is used as-is."""
        table = TokenTable({'s': ['ach']})
        ng = NameGen(tokens=table, cfg=cfg)
        assert ng.tokens is table

    def test_init_loads_configured_file(self, tmp_path):
        """Test the configured token file is merged over the defaults."""
        path = tmp_path / "tokens.json"
        path.write_text(json.dumps({"x": ["foo"]}), encoding='utf-8')
        ng = NameGen(cfg=Config(tokens_path=path, tokens_merge=True))
        assert ng.tokens.lookup('x') == ('foo',)
        assert 's' in ng.tokens

    def test_init_replaces_with_configured_file(self, tmp_path):
        """Test tokens_merge=False replaces the defaults."""
        path = tmp_path / "tokens.json"
        path.write_text(json.dumps({"x": ["foo"]}), encoding='utf-8')
        ng = NameGen(cfg=Config(tokens_path=path, tokens_merge=False))
        assert set(ng.tokens.keys()) == {'x'}

    def test_init_bad_configured_file(self, tmp_path):
        """Test a broken configured file raises LoadError."""
        with pytest.raises(LoadError):
            NameGen(cfg=Config(tokens_path=tmp_path / "missing.json"))

    def test_init_undecodable_configured_file(self, tmp_path):
        """Test a configured file with invalid UTF-8 raises LoadError."""
        path = tmp_path / "tokens.json"
        path.write_bytes(b'{"x": ["\xff"]}')
        with pytest.raises(LoadError):
            NameGen(cfg=Config(tokens_path=path))


class TestNameGenGenerate:
    """Tests for NameGen generation methods."""

    @pytest.fixture
    def ng(self, cfg):
        return NameGen(tokens=TokenTable({'s': ['ach'], 'c': ['b']}), cfg=cfg)

    def test_generate(self, ng):
        """Test the documented scenario through the facade."""
        result = ng.generate("s(dim)", seed=1)
        assert result.ok
        assert result.name == "achdim"

    def test_generate_default_pattern(self, ng):
        """Test the configured default pattern is used."""
        assert ng.generate(seed=4).name == "abc"

    def test_generate_random_seed(self, ng):
        """Test generation without a seed."""
        result = ng.generate("s")
        assert result.name == "ach"
        assert 0 <= result.seed <= 0xFFFFFFFF

    def test_generate_preset(self, ng):
        """Test preset generation."""
        assert ng.generate_preset("dim", seed=3).name == "bdim"

    def test_generate_preset_unknown(self, ng):
        """Test unknown presets raise ValueError."""
        with pytest.raises(ValueError):
            ng.generate_preset("nope")

    def test_generate_many_default_count(self, ng):
        """Test generate_many uses the configured count."""
        results = ng.generate_many(seed=1)
        assert [r.name for r in results] == ["abc"] * 3

    def test_generate_many_reproducible(self):
        """Test the same seed gives the same batch."""
        ng = NameGen(cfg=Config())
        a = [r.name for r in ng.generate_many("!ssV'!i", count=8, seed=99)]
        b = [r.name for r in ng.generate_many("!ssV'!i", count=8, seed=99)]
        assert a == b

    def test_validate(self, ng):
        """Test validation through the facade."""
        assert ng.validate("<c|>") is Status.SUCCESS
        assert ng.validate("<c|)") is Status.UNBALANCED_GROUP

    def test_failure_status(self, ng):
        """Test failures come back as statuses, not exceptions."""
        result = ng.generate("(abc", seed=1)
        assert result.status is Status.UNBALANCED_GROUP
        assert result.name == ""


class TestNameGenTokens:
    """Tests for token swapping on NameGen."""

    @pytest.fixture
    def ng(self, cfg):
        return NameGen(tokens=TokenTable({'x': ['old']}), cfg=cfg)

    def test_load_tokens(self, ng, tmp_path):
        """Test loading swaps in a new table."""
        path = tmp_path / "tokens.json"
        path.write_text(json.dumps({"x": ["foo", "bar"]}), encoding='utf-8')
        old = ng.tokens
        ng.load_tokens(path)
        assert ng.tokens is not old
        assert old.lookup('x') == ('old',)
        assert ng.generate("x", seed=2).name in {'foo', 'bar'}

    def test_load_tokens_failure_keeps_table(self, ng, tmp_path):
        """Test a failed load leaves the current table in place."""
        path = tmp_path / "tokens.json"
        path.write_text("[]", encoding='utf-8')
        old = ng.tokens
        with pytest.raises(LoadError):
            ng.load_tokens(path)
        assert ng.tokens is old
        assert ng.generate("x", seed=1).name == "old"

    def test_set_tokens(self, ng):
        """Test set_tokens replaces one key without touching the old table."""
        old = ng.tokens
        ng.set_tokens('x', ['new'])
        assert ng.generate("x", seed=1).name == "new"
        assert old.lookup('x') == ('old',)


class TestModuleFunctions:
    """Tests for module-level helpers."""

    def test_generate(self):
        """Test quick generation with defaults."""
        assert namegen.generate("(x)").name == "x"

    def test_generate_with_table(self):
        """Test quick generation with an explicit table."""
        table = TokenTable({'s': ['ach']})
        assert namegen.generate("!s", seed=5, tokens=table).name == "Ach"

    def test_version(self):
        """Test version string is present."""
        assert isinstance(namegen.__version__, str)
