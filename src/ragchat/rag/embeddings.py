"""Bag-of-words vector space.

The vocabulary is built from the whole chunk corpus: tokens that occur in too
few chunks carry no retrieval signal, and tokens that occur in most chunks act
as stopwords, so both are pruned. Every vector is a term-count vector over the
retained terms, scaled to unit length.
"""

import hashlib
import logging
import math
import re
from collections import Counter
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseEmbedding
from .exceptions import VocabularyNotBuiltError

logger = logging.getLogger(__name__)

# Underscore is part of \w but is punctuation here.
_NON_ALNUM = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")

MIN_TOKEN_LENGTH = 3


def preprocess(text: str) -> str:
    """Lower-case text and replace punctuation with spaces."""
    text = _NON_ALNUM.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def tokenize(text: str) -> list[str]:
    """Split text into lower-case tokens of at least three characters."""
    return [token for token in preprocess(text).split() if len(token) >= MIN_TOKEN_LENGTH]


class Vocabulary(BaseModel):
    """Retained terms of a corpus in a fixed, lexicographic order.

    Attributes:
        terms: Retained terms; position defines the vector dimension
        document_frequencies: Number of corpus texts containing each retained term
        n_documents: Size of the corpus the vocabulary was built from
    """

    model_config = ConfigDict(frozen=True)

    terms: tuple[str, ...] = ()
    document_frequencies: dict[str, int] = Field(default_factory=dict)
    n_documents: int = 0

    @property
    def dimension(self) -> int:
        return len(self.terms)

    @property
    def index(self) -> dict[str, int]:
        return {term: i for i, term in enumerate(self.terms)}

    @property
    def fingerprint(self) -> str:
        """Identifier of the vector space spanned by this vocabulary."""
        return hashlib.sha256("\x00".join(self.terms).encode()).hexdigest()[:16]

    def __len__(self) -> int:
        return len(self.terms)

    def __contains__(self, term: object) -> bool:
        return term in self.document_frequencies

    def __repr__(self) -> str:
        return f"Vocabulary(dimension={self.dimension}, n_documents={self.n_documents})"


def build_vocabulary(
    corpus: Iterable[str],
    min_doc_freq: int = 2,
    max_doc_proportion: float = 0.7,
) -> Vocabulary:
    """Build a pruned vocabulary from a corpus of chunk texts.

    Args:
        corpus: Chunk texts
        min_doc_freq: Minimum number of texts a term must appear in
        max_doc_proportion: Maximum share of texts a term may appear in

    Returns:
        Vocabulary with terms sorted lexicographically
    """
    doc_freqs: Counter = Counter()
    n_documents = 0

    for text in corpus:
        n_documents += 1
        doc_freqs.update(set(tokenize(text)))

    retained = {
        term: df
        for term, df in doc_freqs.items()
        if df >= min_doc_freq and df / n_documents <= max_doc_proportion
    }

    return Vocabulary(
        terms=tuple(sorted(retained)),
        document_frequencies=retained,
        n_documents=n_documents,
    )


def l2_normalize(vector: list[float]) -> list[float]:
    """Scale a vector to unit length; the zero vector is returned unchanged."""
    norm = math.sqrt(sum(x * x for x in vector))
    if norm == 0:
        return vector
    return [x / norm for x in vector]


def vectorize(text: str, vocabulary: Vocabulary) -> list[float]:
    """Turn text into a unit-length term-count vector over the vocabulary.

    Terms outside the vocabulary are ignored. Text without any retained
    term maps to the all-zero vector.
    """
    index = vocabulary.index
    vector = [0.0] * vocabulary.dimension

    for token, count in Counter(tokenize(text)).items():
        position = index.get(token)
        if position is not None:
            vector[position] = float(count)

    return l2_normalize(vector)


class BagOfWordsEmbedding(BaseEmbedding):
    """Deterministic term-count embedding over a corpus-fitted vocabulary.

    The vector space changes whenever ``fit`` is called, so every stored
    vector must be recomputed after a refit.
    """

    def __init__(self, min_doc_freq: int = 2, max_doc_proportion: float = 0.7):
        """Initialize the embedding.

        Args:
            min_doc_freq: Minimum document frequency of a retained term
            max_doc_proportion: Maximum document proportion of a retained term
        """
        self.min_doc_freq = min_doc_freq
        self.max_doc_proportion = max_doc_proportion
        self._vocabulary: Optional[Vocabulary] = None

    @property
    def vocabulary(self) -> Optional[Vocabulary]:
        return self._vocabulary

    @property
    def dimension(self) -> int:
        return self._vocabulary.dimension if self._vocabulary else 0

    def fit(self, corpus: list[str]) -> Vocabulary:
        """Rebuild the vocabulary from the full corpus."""
        self._vocabulary = build_vocabulary(
            corpus,
            min_doc_freq=self.min_doc_freq,
            max_doc_proportion=self.max_doc_proportion,
        )
        logger.info(
            f"Built vocabulary of {self._vocabulary.dimension} terms "
            f"from {self._vocabulary.n_documents} chunks"
        )
        return self._vocabulary

    def _require_vocabulary(self) -> Vocabulary:
        if self._vocabulary is None:
            raise VocabularyNotBuiltError()
        return self._vocabulary

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        vocabulary = self._require_vocabulary()
        return [vectorize(text, vocabulary) for text in texts]

    async def embed_query(self, text: str) -> list[float]:
        return vectorize(text, self._require_vocabulary())
