"""Translation catalogue helpers backed by the packaged JSON resources.

Each locale ships one ``<locale>.json`` file with a ``backend`` section (flat
dotted keys used for API labels and invoice texts) and a ``frontend`` section
(nested labels for the form shell). Italian is the base catalogue; any key
missing from another locale resolves through it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import cache
from importlib import resources
from typing import Any, Iterable, Mapping

_BASE_LOCALE = "it"
_TRANSLATIONS_PACKAGE = "forfettario.translations"


@dataclass(frozen=True)
class Translator:
    """Callable helper for retrieving localized strings."""

    locale: str
    _messages: Mapping[str, str]
    _fallback: Mapping[str, str]

    def __call__(self, key: str, **values: Any) -> str:
        message = self._messages.get(key) or self._fallback.get(key, key)
        if values:
            return message.format(**values)
        return message

    def labels(self, keys: Mapping[str, str]) -> dict[str, str]:
        """Resolve a ``field -> translation key`` mapping in one call."""

        return {field: self(key) for field, key in keys.items()}

    def sequence(self, prefix: str) -> list[str]:
        """Return the numbered entries ``<prefix>.1``, ``<prefix>.2`` ... in order."""

        entries: list[str] = []
        index = 1
        while True:
            key = f"{prefix}.{index}"
            if key not in self._messages and key not in self._fallback:
                return entries
            entries.append(self(key))
            index += 1


@dataclass(frozen=True)
class Catalogue:
    """Representation of a locale catalogue backed by the shared resources."""

    locale: str
    backend: Mapping[str, str]
    frontend: Mapping[str, Any]


def _flatten(entries: Mapping[str, Any], prefix: str = "") -> Iterable[tuple[str, str]]:
    for key, value in entries.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            yield from _flatten(value, dotted)
        else:
            yield dotted, str(value)


@cache
def available_locales() -> tuple[str, ...]:
    """Return the locales with a published translation payload."""

    root = resources.files(_TRANSLATIONS_PACKAGE)
    locales = sorted(
        entry.name.removesuffix(".json")
        for entry in root.iterdir()
        if entry.name.endswith(".json")
    )
    return tuple(locales) or (_BASE_LOCALE,)


@cache
def _load_catalogue(locale: str) -> Catalogue:
    """Read and cache the catalogue for ``locale``."""

    resource = resources.files(_TRANSLATIONS_PACKAGE).joinpath(f"{locale}.json")
    if not resource.is_file():
        return Catalogue(locale=locale, backend={}, frontend={})

    with resource.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)

    backend_raw = payload.get("backend") or {}
    frontend = payload.get("frontend") or {}
    if not isinstance(backend_raw, Mapping) or not isinstance(frontend, Mapping):
        raise ValueError(f"Translation catalogue '{locale}' has an invalid structure")

    return Catalogue(
        locale=locale,
        backend=dict(_flatten(backend_raw)),
        frontend=frontend,
    )


def normalise_locale(locale: str | None) -> str:
    """Normalise a locale hint (``it-IT``, ``en_GB``, ``EN``) to a catalogue key."""

    if not locale:
        return _BASE_LOCALE

    language = locale.strip().lower().replace("_", "-").split("-")[0]
    return language if language in available_locales() else _BASE_LOCALE


def get_translator(locale: str | None = None) -> Translator:
    """Return a translator instance for the requested locale."""

    normalized = normalise_locale(locale)
    catalogue = _load_catalogue(normalized)
    base = _load_catalogue(_BASE_LOCALE)

    return Translator(
        locale=catalogue.locale,
        _messages=catalogue.backend,
        _fallback=base.backend,
    )


def load_translations(locale: str | None = None) -> dict[str, Any]:
    """Expose combined backend/frontend translations for API consumers."""

    normalized = normalise_locale(locale)
    catalogue = _load_catalogue(normalized)
    base = _load_catalogue(_BASE_LOCALE)

    return {
        "locale": normalized,
        "available_locales": list(available_locales()),
        "backend": dict(catalogue.backend),
        "frontend": catalogue.frontend,
        "fallback": {
            "locale": _BASE_LOCALE,
            "backend": dict(base.backend),
            "frontend": base.frontend,
        },
    }


__all__ = [
    "Translator",
    "Catalogue",
    "available_locales",
    "get_translator",
    "load_translations",
    "normalise_locale",
]
