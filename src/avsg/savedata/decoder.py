from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections import defaultdict
from types import MappingProxyType
from typing import Any, Dict, List, Optional

from ..errors import DecodeError
from .models import SaveData
from .schema import MAPPING, RECORD, SCALAR, Field, fields_for

logger = logging.getLogger(__name__)

XSI_NIL = "{http://www.w3.org/2001/XMLSchema-instance}nil"


def decode(xml_text: str, *, strict: bool = True) -> SaveData:
    """Decode a save file's XML text into :class:`SaveData`.

    The root element's name is not checked; its children are matched against
    the schema table. Decoding is all-or-nothing: any mismatch raises
    :class:`DecodeError` and no partial document is returned.

    With ``strict`` (the default) unknown elements and attributes are errors.
    Without it they are logged and skipped.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise DecodeError(f"Malformed XML: {e}") from e
    logger.debug("Decoding save data from <%s>", root.tag)
    return decode_element(root, SaveData, strict=strict)


def decode_element(element: ET.Element, cls: type, *, strict: bool = True, path: Optional[str] = None) -> Any:
    """Decode ``element`` into an instance of the record class ``cls``."""
    path = path or element.tag
    fields = fields_for(cls)
    by_tag = {f.tag: f for f in fields}

    children: Dict[str, List[ET.Element]] = defaultdict(list)
    for child in element:
        if child.tag not in by_tag:
            _unknown(f"{path}/{child.tag}", "element", strict)
            continue
        if _is_nil(child):
            continue
        children[child.tag].append(child)

    attributes: Dict[str, str] = {}
    for name, value in element.attrib.items():
        if name.startswith("{"):
            # Namespaced attributes (xsi:type, xsi:nil, ...) are serializer noise.
            continue
        field = by_tag.get(name)
        if field is None or field.kind != SCALAR or field.repeated:
            _unknown(f"{path}/@{name}", "attribute", strict)
            continue
        attributes[name] = value

    kwargs: Dict[str, Any] = {}
    for field in fields:
        where = f"{path}/{field.tag}"
        found = children.get(field.tag, [])
        if field.repeated:
            kwargs[field.attr] = _decode_repeated(field, found, where, strict)
            continue

        sources = len(found) + (1 if field.tag in attributes else 0)
        if sources > 1:
            raise DecodeError(f"{where}: expected a single value, found {sources}")
        if field.tag in attributes:
            kwargs[field.attr] = _parse_text(field, attributes[field.tag], where)
        elif found:
            kwargs[field.attr] = _decode_one(field, found[0], where, strict)
        elif field.has_default:
            logger.debug("%s absent, using default %s", where, field.default)
            kwargs[field.attr] = field.default
        elif field.optional:
            kwargs[field.attr] = None
        else:
            raise DecodeError(f"{where}: missing required field '{field.attr}'")

    return cls(**kwargs)


def _decode_repeated(field: Field, found: List[ET.Element], where: str, strict: bool) -> Any:
    if not found:
        if field.optional:
            return None
        raise DecodeError(f"{where}: missing required field '{field.attr}'")
    return field.collection(_decode_one(field, el, f"{where}[{i}]", strict) for i, el in enumerate(found))


def _decode_one(field: Field, element: ET.Element, where: str, strict: bool) -> Any:
    if field.kind == RECORD:
        return decode_element(element, field.target, strict=strict, path=where)
    _check_no_attributes(element, where, strict)
    if field.kind == MAPPING:
        return _decode_mapping(element, where, strict)
    if len(element):
        raise DecodeError(f"{where}: expected a text value, found child elements")
    return _parse_text(field, element.text or "", where)


def _decode_mapping(element: ET.Element, where: str, strict: bool) -> MappingProxyType:
    entries: Dict[str, str] = {}
    for child in element:
        if child.tag in entries:
            raise DecodeError(f"{where}: duplicate key '{child.tag}'")
        if len(child):
            raise DecodeError(f"{where}/{child.tag}: expected a text value, found child elements")
        _check_no_attributes(child, f"{where}/{child.tag}", strict)
        entries[child.tag] = child.text or ""
    return MappingProxyType(entries)


def _check_no_attributes(element: ET.Element, where: str, strict: bool) -> None:
    # Text-valued and mapping elements carry no schema attributes.
    for name in element.attrib:
        if not name.startswith("{"):
            _unknown(f"{where}/@{name}", "attribute", strict)


def _parse_text(field: Field, text: str, where: str) -> Any:
    try:
        return field.parse(text)
    except ValueError as e:
        raise DecodeError(f"{where}: invalid value {text!r} ({e})") from e


def _is_nil(element: ET.Element) -> bool:
    return element.get(XSI_NIL, "").strip().lower() == "true"


def _unknown(where: str, what: str, strict: bool) -> None:
    if strict:
        raise DecodeError(f"{where}: unknown {what}")
    logger.warning("Skipping unknown %s %s", what, where)
