"""
Configuration utilities.
"""

import json
from pathlib import Path

import yaml

from pydantic import BaseModel, Field


class Config(BaseModel):
    """Base configuration class."""

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    @classmethod
    def from_file(cls, path: str | Path) -> "Config":
        """Load configuration from file (YAML or JSON)."""
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        elif path.suffix == ".json":
            with open(path) as f:
                data = json.load(f)
            return cls(**data)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")


class RAGConfig(Config):
    """Configuration for a retrieval session.

    ``chunk_overlap < chunk_size`` is checked by the chunker, so an invalid
    pair surfaces as ChunkingConfigError when the session is built.
    """
    # Chunking
    chunk_size: int = Field(default=1000, gt=0)
    chunk_overlap: int = Field(default=200, ge=0)

    # Vocabulary pruning
    min_doc_freq: int = Field(default=2, ge=1)
    max_doc_proportion: float = Field(default=0.7, gt=0.0, le=1.0)

    # Retrieval
    top_k: int = Field(default=3, ge=1)

    # Answer generation
    model: str = "gpt-3.5-turbo"
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=500, gt=0)
    api_key: str | None = None
    base_url: str | None = None


def load_config(path: str | Path = "ragchat.yaml") -> RAGConfig:
    """
    Load session configuration from file.

    Args:
        path: Path to config file

    Returns:
        RAGConfig instance (defaults if the file does not exist)
    """
    path = Path(path)

    if not path.exists():
        return RAGConfig()

    return RAGConfig.from_file(path)
