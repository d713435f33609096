"""Tests for configuration and logging utilities."""

import json
import logging

import pytest
from pydantic import ValidationError

from ragchat.utils import get_logger, set_log_level
from ragchat.utils.config import RAGConfig, load_config


class TestRAGConfig:
    """Tests for session configuration."""

    def test_defaults(self):
        """Test default values."""
        config = RAGConfig()

        assert config.chunk_size == 1000
        assert config.chunk_overlap == 200
        assert config.min_doc_freq == 2
        assert config.max_doc_proportion == 0.7
        assert config.top_k == 3
        assert config.model == "gpt-3.5-turbo"
        assert config.max_tokens == 500

    def test_load_yaml(self, tmp_path):
        """Test loading from a YAML file."""
        path = tmp_path / "ragchat.yaml"
        path.write_text("chunk_size: 500\nchunk_overlap: 50\ntop_k: 5\n")

        config = load_config(path)

        assert config.chunk_size == 500
        assert config.chunk_overlap == 50
        assert config.top_k == 5
        assert config.model == "gpt-3.5-turbo"

    def test_load_json(self, tmp_path):
        """Test loading from a JSON file."""
        path = tmp_path / "ragchat.json"
        path.write_text(json.dumps({"model": "gpt-4o", "temperature": 0.1}))

        config = load_config(path)

        assert config.model == "gpt-4o"
        assert config.temperature == 0.1

    def test_empty_yaml(self, tmp_path):
        """Test that an empty file gives defaults."""
        path = tmp_path / "ragchat.yaml"
        path.write_text("")

        assert load_config(path) == RAGConfig()

    def test_missing_file(self, tmp_path):
        """Test that a missing file gives defaults."""
        assert load_config(tmp_path / "nope.yaml") == RAGConfig()

    def test_unsupported_format(self, tmp_path):
        """Test that unknown config formats are rejected."""
        path = tmp_path / "ragchat.ini"
        path.write_text("[ragchat]")

        with pytest.raises(ValueError):
            load_config(path)

    @pytest.mark.parametrize("field,value", [
        ("chunk_size", 0),
        ("chunk_overlap", -1),
        ("min_doc_freq", 0),
        ("max_doc_proportion", 1.5),
        ("top_k", 0),
    ])
    def test_bounds(self, field, value):
        """Test that out-of-range values are rejected."""
        with pytest.raises(ValidationError):
            RAGConfig(**{field: value})


class TestLogging:
    """Tests for logging helpers."""

    def test_get_logger_single_handler(self):
        """Test that repeated calls do not stack handlers."""
        logger = get_logger("ragchat.tests.single")
        get_logger("ragchat.tests.single")

        assert len(logger.handlers) == 1

    def test_set_log_level(self):
        """Test that the level applies to existing ragchat loggers."""
        logger = get_logger("ragchat.tests.level")

        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG

        set_log_level(logging.INFO)
        assert logger.level == logging.INFO
