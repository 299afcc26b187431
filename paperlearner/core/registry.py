"""
The set of loaded sources, built once per process and read-only afterwards
"""
from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .classifier import classify
from .config import CONFIG_SUFFIXES, Source, load_source_file
from .errors import ConfigError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def bundled_config_dir() -> Path:
    return Path(__file__).resolve().parent.parent / "retrievers"


class Registry:
    """Loaded sources in classification precedence order"""

    def __init__(self, sources: Iterable[Source] = (), skipped: Iterable[ConfigError] = ()):
        ordered: List[Source] = []
        for source in sources:
            position = next(
                (idx for idx, existing in enumerate(ordered) if existing.name == source.name),
                None,
            )
            if position is None:
                ordered.append(source)
            else:
                logger.warning("Source %r redefined; later definition replaces it", source.name)
                ordered[position] = source

        self._sources: Tuple[Source, ...] = tuple(ordered)
        self._by_name: Mapping[str, Source] = MappingProxyType(
            {source.name: source for source in ordered}
        )
        self._skipped: Tuple[ConfigError, ...] = tuple(skipped)

    @classmethod
    def from_sources(cls, sources: Iterable[Source]) -> "Registry":
        return cls(sources)

    @property
    def sources(self) -> Tuple[Source, ...]:
        return self._sources

    @property
    def skipped(self) -> Tuple[ConfigError, ...]:
        """User configuration files that failed to load"""
        return self._skipped

    @property
    def names(self) -> List[str]:
        return [source.name for source in self._sources]

    def get(self, name: str) -> Optional[Source]:
        return self._by_name.get(name)

    def __getitem__(self, name: str) -> Source:
        return self._by_name[name]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Source]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def classify(self, value: str) -> Tuple[Source, str]:
        return classify(value, self._sources)

    def __repr__(self) -> str:
        return f"Registry({', '.join(self.names)})"


def config_files(directory: PathLike) -> List[Path]:
    """Configuration files of ``directory`` in lexical filename order."""
    root = Path(directory).expanduser()
    if not root.is_dir():
        return []
    return sorted(
        (path for path in root.iterdir() if path.is_file() and path.suffix.lower() in CONFIG_SUFFIXES),
        key=lambda path: path.name,
    )


def load_registry(
    bundled_dir: Optional[PathLike] = None,
    user_dir: Optional[PathLike] = None,
    strict: bool = False,
) -> Registry:
    """
    Load bundled sources, then user sources.

    Args:
        bundled_dir: Directory of default sources (package data when omitted)
        user_dir: Directory of user sources; may be missing
        strict: Raise on a bad user file instead of skipping it

    Raises:
        ConfigError: A bundled file is invalid, or a user file is invalid in strict mode
    """
    sources: List[Source] = []
    skipped: List[ConfigError] = []

    for path in config_files(bundled_dir or bundled_config_dir()):
        sources.append(load_source_file(path))
        logger.debug("Loaded bundled source from %s", path)

    if user_dir is not None:
        for path in config_files(user_dir):
            try:
                source = load_source_file(path)
            except ConfigError as exc:
                if strict:
                    raise
                logger.warning("Skipping source configuration %s", exc)
                skipped.append(exc)
                continue
            sources.append(source)
            logger.debug("Loaded user source %r from %s", source.name, path)

    return Registry(sources, skipped=skipped)
