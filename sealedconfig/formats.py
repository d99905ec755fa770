import os
from typing import AnyStr
from typing import Callable
from typing import List
from typing import NamedTuple
from typing import Optional
from urllib.parse import urlsplit

import aenum

from sealedconfig import converters
from sealedconfig import document


@aenum.unique
class Format(aenum.Enum):
    pass


def register_format(x):
    aenum.extend_enum(Format, x, x.lower())


class Codec(NamedTuple):
    parse: Callable[[bytes], document.Document]
    serialize: Callable[[document.Document], bytes]


codec_by_format = {}


def register_codec(format: Format, parse, serialize) -> None:
    codec_by_format[format.value] = Codec(parse=parse, serialize=serialize)


format_by_suffix = {}


def register_file_formats(format: Format, suffixes: List[AnyStr]) -> None:
    for suffix in suffixes:
        format_by_suffix[suffix] = format


def format_for_filename(filename, default: Optional[Format] = None) -> Format:
    """Picks a format from the file suffix of a path or URL."""
    path = urlsplit(filename).path if "://" in filename else filename
    _, suffix = os.path.splitext(path)
    if suffix.lower() not in format_by_suffix:
        if default is not None:
            return default
        raise KeyError("suffix %r not known" % suffix)
    return format_by_suffix[suffix.lower()]


def codec_for_format(format: Format) -> Codec:
    return codec_by_format[format.value]


register_format("Ini")
register_codec(
    Format.Ini,
    parse=lambda x: converters.document_from_ini(converters.string_from_bytes(x, encoding='utf8')),
    serialize=lambda d: converters.bytes_from_string(converters.ini_from_document(d), encoding='utf8'),
)
register_file_formats(Format.Ini, [".ini", ".conf", ".cfg"])

register_format("Toml")
register_codec(
    Format.Toml,
    parse=lambda x: converters.document_from_obj(
        converters.obj_from_toml(converters.string_from_bytes(x, encoding='utf8'))),
    serialize=lambda d: converters.bytes_from_string(
        converters.toml_from_obj(converters.obj_from_document(d)), encoding='utf8'),
)
register_file_formats(Format.Toml, [".toml"])

register_format("Yaml")
register_codec(
    Format.Yaml,
    parse=lambda x: converters.document_from_obj(
        converters.obj_from_yaml(converters.string_from_bytes(x, encoding='utf8'))),
    serialize=lambda d: converters.bytes_from_string(
        converters.yaml_from_obj(converters.obj_from_document(d)), encoding='utf8'),
)
register_file_formats(Format.Yaml, [".yaml", ".yml"])
