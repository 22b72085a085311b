"""Serve the packaged ``it``/``en`` catalogues to the calculator front-end.

Italian is the base catalogue: the payload always carries it under
``fallback`` so the form can resolve keys missing from the requested locale.
"""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from forfettario.backend.app.localization import load_translations

blueprint = Blueprint("translations", __name__, url_prefix="/api/v1/translations")


@blueprint.get("/")
def get_catalogue_for_query():
    """Return the catalogue named by ``?locale=``, Italian when omitted."""

    return jsonify(load_translations(request.args.get("locale"))), 200


@blueprint.get("/<locale>")
def get_catalogue(locale: str):
    """Return the catalogue for ``locale`` (``en``, ``en-GB``, ``it`` ...).

    Unsupported locales resolve to the Italian catalogue.
    """

    return jsonify(load_translations(locale)), 200


__all__ = ["blueprint"]
