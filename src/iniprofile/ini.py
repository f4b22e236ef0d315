import codecs
import dataclasses
import re
from collections.abc import Iterator
from typing import Self

import chardet

# Encoding for files without a BOM whose encoding can't be detected,
# and for newly created files.
LEGACY_ENCODING = "cp1252"

BOMS = [
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
]

# Written ahead of the text, since the codecs for a fixed byte order do not.
UTF16_BOMS = {
    "utf-16-le": codecs.BOM_UTF16_LE,
    "utf-16-be": codecs.BOM_UTF16_BE,
}

REGEX = re.compile(
    r"""
    # Anchor to the start of the line, ignoring indentation.
    ^ \s*

    (?:
        # Match a section (anything after the closing bracket is ignored)...
        (?:\[(?P<section>[^\]]*)\] .*?)
        # or a comment...
        | (?P<comment>[;\#] .*?)
        # or a property (Whitespace around the equals sign is ignored).
        | (?:(?P<key>[^=\s][^=]*?) \s* = \s* (?P<value>.*?))
    )

    # Anchor to the end of the line.
    \s* $
    """,
    flags=re.VERBOSE,
)


@dataclasses.dataclass(slots=True)
class Section:
    """An INI section, i.e. [name]."""

    name: str


@dataclasses.dataclass(slots=True)
class Property:
    """An INI property, i.e. key=value."""

    key: str
    value: str


def parse(line: str) -> Section | Property | None:
    """Parse an INI line.

    Args:
        line: The line to parse.

    Returns:
        A section, property, or None if the line is a comment or failed to parse.
    """

    if m := REGEX.match(line):
        if (section := m["section"]) is not None:
            return Section(section.strip())
        elif m["key"] is not None:
            return Property(key=m["key"], value=m["value"])

    return None


def same(a: str, b: str) -> bool:
    """Compare two section or key names case-insensitively, ignoring surrounding whitespace."""

    return a.strip().casefold() == b.strip().casefold()


def decode(raw: bytes) -> tuple[str, str]:
    """Decode the contents of an INI file.

    The encoding is taken from the BOM if there is one, otherwise it is detected.

    Args:
        raw: The file contents.

    Returns:
        A tuple of the text and the encoding it was decoded with.
    """

    for bom, encoding in BOMS:
        if raw.startswith(bom):
            return raw[len(bom) :].decode(encoding), encoding

    if raw.isascii():
        # Widened so values outside of ASCII can still be written back.
        return raw.decode(LEGACY_ENCODING), LEGACY_ENCODING

    try:
        return raw.decode("utf-8"), "utf-8"
    except UnicodeDecodeError:
        pass

    encoding = LEGACY_ENCODING

    result = chardet.detect(raw)
    if result["encoding"] is not None and result["confidence"] >= 0.8:
        encoding = result["encoding"].lower()

    try:
        return raw.decode(encoding), encoding
    except (UnicodeDecodeError, LookupError):
        return raw.decode(LEGACY_ENCODING, errors="replace"), LEGACY_ENCODING


@dataclasses.dataclass(slots=True)
class Document:
    """An INI file as a list of lines.

    Edits only touch the lines they need to, so comments and formatting are kept.
    Lookups are case-insensitive and the first of any duplicate sections or keys wins.

    Attributes:
        lines: The lines of the file, without line endings.
        encoding: The encoding to write the file in.
        newline: The line ending to write the file with.
    """

    lines: list[str] = dataclasses.field(default_factory=list)
    encoding: str = LEGACY_ENCODING
    newline: str = "\r\n"

    @classmethod
    def from_bytes(cls, raw: bytes) -> Self:
        """Load a document from the contents of an INI file.

        Args:
            raw: The file contents.

        Returns:
            The document.
        """

        text, encoding = decode(raw)

        newline = "\n" if "\n" in text and "\r\n" not in text else "\r\n"

        return cls(lines=text.splitlines(), encoding=encoding, newline=newline)

    def to_bytes(self) -> bytes:
        """Serialize the document in its encoding.

        Characters the encoding can't represent are replaced with '?'.

        Returns:
            The file contents.
        """

        text = "".join(line + self.newline for line in self.lines)

        bom = UTF16_BOMS.get(self.encoding, b"")

        return bom + text.encode(self.encoding, errors="replace")

    def _parsed(self, start: int = 0) -> Iterator[tuple[int, Section | Property | None]]:
        for n in range(start, len(self.lines)):
            yield n, parse(self.lines[n])

    def _find_section(self, name: str) -> int | None:
        # Index of the section's header line.
        for n, cfg in self._parsed():
            if isinstance(cfg, Section) and same(cfg.name, name):
                return n

        return None

    def _span(self, header: int) -> tuple[int, int]:
        # Lines belonging to a section, excluding its header.
        for n, cfg in self._parsed(header + 1):
            if isinstance(cfg, Section):
                return header + 1, n

        return header + 1, len(self.lines)

    def _properties(self, section: str) -> Iterator[tuple[int, Property]]:
        header = self._find_section(section)
        if header is None:
            return

        start, end = self._span(header)

        for n in range(start, end):
            if isinstance(cfg := parse(self.lines[n]), Property):
                yield n, cfg

    def _find_property(self, section: str, key: str) -> tuple[int, Property] | None:
        for n, prop in self._properties(section):
            if same(prop.key, key):
                return n, prop

        return None

    def has_section(self, name: str) -> bool:
        return self._find_section(name) is not None

    def sections(self) -> list[str]:
        """Return the names of all sections, in order of appearance."""

        names: list[str] = []

        for _, cfg in self._parsed():
            if isinstance(cfg, Section) and not any(same(cfg.name, n) for n in names):
                names.append(cfg.name)

        return names

    def keys(self, section: str) -> list[str]:
        """Return the names of all keys in a section, in order of appearance.

        Args:
            section: The section's name.

        Returns:
            The key names, or an empty list if the section doesn't exist.
        """

        names: list[str] = []

        for _, prop in self._properties(section):
            if not any(same(prop.key, n) for n in names):
                names.append(prop.key)

        return names

    def get(self, section: str, key: str) -> str | None:
        """Return a key's value, or None if the section or key doesn't exist."""

        if found := self._find_property(section, key):
            return found[1].value

        return None

    def set(self, section: str, key: str, value: str):
        """Set a key's value, creating the key and section as needed.

        Args:
            section: The section's name.
            key: The key's name.
            value: The value.
        """

        line = f"{key.strip()}={value}"

        if found := self._find_property(section, key):
            self.lines[found[0]] = line
            return

        header = self._find_section(section)
        if header is None:
            self.lines.extend([f"[{section.strip()}]", line])
            return

        # Insert after the last property so trailing blank lines and comments stay put.
        last = header
        for n, _ in self._properties(section):
            last = n

        self.lines.insert(last + 1, line)

    def remove(self, section: str, key: str):
        """Remove a key from a section. Nothing happens if it doesn't exist."""

        if found := self._find_property(section, key):
            del self.lines[found[0]]

    def remove_section(self, section: str):
        """Remove a section and every line in it. Nothing happens if it doesn't exist."""

        header = self._find_section(section)
        if header is not None:
            _, end = self._span(header)
            del self.lines[header:end]
