"""Tools for turning document bytes into Documents and back.

Each format is a pair of functions built from these pieces. For
example the TOML parser is:

    p = lambda x: document_from_obj(
        obj_from_toml(
            string_from_bytes(x, encoding='utf8')
        )
    )

Every step raises SerializationError on failure so that callers only
deal with a single error type.

"""

import configparser
import io
import re
from typing import Any
from typing import AnyStr

import toml

from sealedconfig import document
from sealedconfig.exceptions import SerializationError


try:
    from yaml import CSafeDumper as Dumper
    from yaml import CSafeLoader as Loader
except ImportError:
    from yaml import SafeDumper as Dumper
    from yaml import SafeLoader as Loader

import yaml


def string_from_bytes(x: bytes, encoding='utf8') -> AnyStr:
    try:
        return x.decode(encoding)
    except Exception as e:
        raise SerializationError(e) from e


def bytes_from_string(x: str, encoding='utf8') -> bytes:
    try:
        return x.encode(encoding)
    except Exception as e:
        raise SerializationError(e) from e


def obj_from_toml(x: AnyStr) -> Any:
    try:
        return toml.loads(x)
    except Exception as e:
        raise SerializationError(e) from e


def toml_from_obj(x: Any) -> str:
    try:
        return toml.dumps(x)
    except Exception as e:
        raise SerializationError(e) from e


def obj_from_yaml(x: AnyStr) -> Any:
    try:
        return yaml.load(x, Loader=Loader)
    except Exception as e:
        raise SerializationError(e) from e


def yaml_from_obj(x: Any) -> str:
    if not x:
        return ""
    try:
        return yaml.dump(x, Dumper=Dumper, sort_keys=False, default_flow_style=False, allow_unicode=True)
    except Exception as e:
        raise SerializationError(e) from e


def _scalar_string(v):
    if v is None:
        return ""
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, (dict, list)):
        raise SerializationError("nested value %r is not a scalar" % (v,))
    return str(v)


def document_from_obj(x: Any) -> document.Document:
    """Builds a Document from a mapping of section name to mapping of scalars."""
    if x is None:
        return document.Document()
    if not isinstance(x, dict):
        raise SerializationError("document must be a mapping of sections, got %s" % type(x).__name__)
    sections = {}
    for name, section in x.items():
        if section is None:
            section = {}
        if not isinstance(section, dict):
            raise SerializationError("section %r must be a mapping" % (name,))
        sections[str(name)] = {str(k): _scalar_string(v) for k, v in section.items()}
    return document.Document.from_dict(sections)


def obj_from_document(doc: document.Document) -> Any:
    return doc.to_dict()


# No section header can contain a newline, so nothing in a parsed file
# lands in configparser's implicit defaults section.
_NO_DEFAULT_SECTION = "\n"

_QUOTES = ('"', '`')


class _IniParser(configparser.ConfigParser):
    # Same as configparser's, except that a key wrapped in quotes may
    # hold the delimiters.
    OPTCRE = re.compile(
        r"""
        (?P<option>"[^"]*"|`[^`]*`|.*?)
        \s*(?P<vi>=|:)\s*
        (?P<value>.*)$
        """,
        re.VERBOSE,
    )


def _ini_parser() -> configparser.ConfigParser:
    c = _IniParser(
        interpolation=None,
        strict=False,
        default_section=_NO_DEFAULT_SECTION,
    )
    c.optionxform = str
    return c


def _is_quoted(x: str) -> bool:
    return len(x) >= 2 and x[0] == x[-1] and x[0] in _QUOTES


def _unquote(x: str) -> str:
    return x[1:-1] if _is_quoted(x) else x


def _ini_section(name: str) -> str:
    if not name or name != name.strip() or "\n" in name:
        raise SerializationError("section name %r cannot be stored in an ini file" % (name,))
    return name


def _ini_key(key: str) -> str:
    if "\n" in key:
        raise SerializationError("key %r cannot be stored in an ini file" % (key,))
    if key and key == key.strip() and key[0] not in '#;["`' and "=" not in key and ":" not in key:
        return key
    for q in _QUOTES:
        if q not in key:
            return q + key + q
    raise SerializationError("key %r cannot be quoted" % (key,))


def _ini_value(value: str) -> str:
    if value != value.strip() or _is_quoted(value):
        value = '"' + value + '"'
    # Continuation lines are stripped, and read as comments when they
    # start with a comment prefix.
    lines = value.split("\n")
    if lines[0] != lines[0].rstrip() or any(
            not line or line != line.strip() or line[0] in "#;" for line in lines[1:]):
        raise SerializationError("value %r cannot be stored in an ini file" % (value,))
    return value


def document_from_ini(x: AnyStr) -> document.Document:
    c = _ini_parser()
    try:
        c.read_string(x)
    except configparser.Error as e:
        raise SerializationError(e) from e
    doc = document.Document()
    for name in c.sections():
        doc.add_section(name)
        for k, v in c.items(name, raw=True):
            doc.set_value(name, _unquote(k), _unquote(v))
    return doc


def ini_from_document(doc: document.Document) -> str:
    c = _ini_parser()
    try:
        for name in doc.section_list():
            section = _ini_section(name)
            c.add_section(section)
            for k, v in doc.items(name):
                c.set(section, _ini_key(k), _ini_value(v))
        buf = io.StringIO()
        c.write(buf)
    except (configparser.Error, ValueError, TypeError) as e:
        raise SerializationError(e) from e
    return buf.getvalue()
