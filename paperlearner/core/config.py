"""
Source configuration models and loading.

One file describes one source. YAML and TOML files share the same keys::

    name: arxiv
    base_url: http://export.arxiv.org
    endpoint_template: http://export.arxiv.org/api/query?id_list={identifier}
    pattern: '(?:^|https?://arxiv\\.org/abs/)(\\d{4}\\.\\d{4,5})$'
    headers:
      Accept: application/xml
    response_format:
      type: xml
      strip_namespaces: true
      field_maps:
        title: {path: feed/entry/title}
"""
from __future__ import annotations

import re
import tomllib
from pathlib import Path
from types import MappingProxyType
from typing import Annotated, Any, List, Literal, Mapping, Optional, Tuple, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    field_validator,
    model_validator,
)

from .errors import ConfigError
from .extractor import validate_path
from .models import CANONICAL_FIELDS

PLACEHOLDER = "{identifier}"
CONFIG_SUFFIXES = (".yaml", ".yml", ".toml")

_DOLLAR_REFERENCE = re.compile(r"\$(?:\{(\w+)\}|(\d+)|([A-Za-z_]\w*)|(\$))")
_SOURCE_NAME = re.compile(r"^[A-Za-z0-9_.-]+$")


def translate_replacement(replacement: str) -> str:
    """Convert a replacement string into an ``re`` template.

    Only ``$`` is special: ``$1``, ``${1}``, ``${name}`` and ``$name`` refer to
    groups and ``$$`` is a literal dollar. Backslashes are copied literally.
    """
    def _sub(match: re.Match) -> str:
        if match.group(4):
            return "$"
        name = match.group(1) or match.group(2) or match.group(3)
        return f"\\g<{name}>"

    return _DOLLAR_REFERENCE.sub(_sub, replacement.replace("\\", "\\\\"))


def replacement_references(replacement: str) -> List[str]:
    """Group names and numbers referenced by a replacement string."""
    return [
        match.group(1) or match.group(2) or match.group(3)
        for match in _DOLLAR_REFERENCE.finditer(replacement)
        if not match.group(4)
    ]


class _ConfigModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class ReplaceTransform(_ConfigModel):
    """Substitute the first match of ``pattern`` with ``replacement``."""
    type: Literal["Replace"] = "Replace"
    pattern: str
    replacement: str

    _regex: re.Pattern = PrivateAttr()
    _template: str = PrivateAttr()

    @field_validator("pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid regex {value!r}: {exc}") from exc
        return value

    @model_validator(mode="after")
    def _check_references(self) -> "ReplaceTransform":
        regex = re.compile(self.pattern)
        for reference in replacement_references(self.replacement):
            if reference.isdigit():
                if int(reference) > regex.groups:
                    raise ValueError(
                        f"replacement refers to group {reference} but pattern has "
                        f"{regex.groups} group(s)"
                    )
            elif reference not in regex.groupindex:
                raise ValueError(f"replacement refers to unknown group {reference!r}")
        try:
            regex.sub(translate_replacement(self.replacement), "")
        except (re.error, IndexError) as exc:
            raise ValueError(f"invalid replacement {self.replacement!r}: {exc}") from exc
        return self

    def model_post_init(self, __context: Any) -> None:
        self._regex = re.compile(self.pattern)
        self._template = translate_replacement(self.replacement)

    @property
    def regex(self) -> re.Pattern:
        return self._regex

    @property
    def template(self) -> str:
        return self._template


class UrlComposeTransform(_ConfigModel):
    """Build a URL from a raw value: ``base`` + value + ``suffix``."""
    type: Literal["UrlCompose", "Url"] = "UrlCompose"
    base: str
    suffix: str = ""


class DateParseTransform(_ConfigModel):
    """Parse a date, trying ``formats`` (strptime) before the built-in layouts."""
    type: Literal["DateParse", "Date"] = "DateParse"
    formats: Tuple[str, ...] = ()
    from_format: Optional[str] = None

    @property
    def hints(self) -> List[str]:
        if self.from_format:
            return [self.from_format, *self.formats]
        return list(self.formats)


class CombineTransform(_ConfigModel):
    """Join several keys of a mapping value, e.g. given and family names."""
    type: Literal["Combine", "CombineFields"] = "Combine"
    fields: Tuple[str, ...] = Field(min_length=1)
    separator: str = " "


Transform = Annotated[
    Union[ReplaceTransform, UrlComposeTransform, DateParseTransform, CombineTransform],
    Field(discriminator="type"),
]


class FieldMap(_ConfigModel):
    path: str
    transform: Optional[Transform] = None

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        validate_path(value)
        return value.strip()


class ResponseFormat(_ConfigModel):
    type: Literal["json", "xml"]
    strip_namespaces: bool = False
    field_maps: Mapping[str, FieldMap]

    @field_validator("field_maps")
    @classmethod
    def _freeze_field_maps(cls, value: Mapping[str, FieldMap]) -> Mapping[str, FieldMap]:
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def _check_fields(self) -> "ResponseFormat":
        if self.type == "json" and self.strip_namespaces:
            raise ValueError("strip_namespaces only applies to xml responses")
        unknown = sorted(set(self.field_maps) - set(CANONICAL_FIELDS))
        if unknown:
            raise ValueError(f"unknown field(s) in field_maps: {', '.join(unknown)}")
        missing = [
            name
            for name, policy in CANONICAL_FIELDS.items()
            if policy.required and name not in self.field_maps
        ]
        if missing:
            raise ValueError(f"field_maps must declare: {', '.join(missing)}")
        return self


class Source(_ConfigModel):
    """A remote metadata source, loaded once and never mutated afterwards."""
    name: str
    source: Optional[str] = None
    base_url: str
    endpoint_template: str
    pattern: str
    headers: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    response_format: ResponseFormat

    _regex: re.Pattern = PrivateAttr()

    @field_validator("headers")
    @classmethod
    def _freeze_headers(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not _SOURCE_NAME.match(value):
            raise ValueError(f"invalid source name {value!r}")
        return value

    @field_validator("endpoint_template")
    @classmethod
    def _check_template(cls, value: str) -> str:
        if PLACEHOLDER not in value:
            raise ValueError(f"endpoint_template must contain {PLACEHOLDER}")
        return value

    @field_validator("pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            regex = re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid regex {value!r}: {exc}") from exc
        if regex.groups < 1:
            raise ValueError("pattern needs a capture group for the identifier")
        return value

    def model_post_init(self, __context: Any) -> None:
        self._regex = re.compile(self.pattern)

    @property
    def regex(self) -> re.Pattern:
        return self._regex

    @property
    def source_name(self) -> str:
        """Name stamped on papers from this source"""
        return self.source or self.name

    @classmethod
    def from_mapping(cls, data: Any, file: Union[str, Path, None] = None) -> "Source":
        if not isinstance(data, dict):
            raise ConfigError(file, "configuration must be a mapping of keys")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(file, _format_validation_error(exc)) from exc


def load_source_file(path: Union[str, Path]) -> Source:
    """Read and validate one source configuration file."""
    file = Path(path)
    suffix = file.suffix.lower()
    if suffix not in CONFIG_SUFFIXES:
        raise ConfigError(file, f"unsupported configuration type {suffix or '<none>'}")

    try:
        text = file.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(file, f"cannot read file: {exc}") from exc

    try:
        if suffix == ".toml":
            data = tomllib.loads(text)
        else:
            data = yaml.safe_load(text)
    except (yaml.YAMLError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(file, f"cannot parse file: {exc}") from exc

    return Source.from_mapping(data, file=file)


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        problems.append(f"{location}: {message}" if location else message)
    return "; ".join(problems)
