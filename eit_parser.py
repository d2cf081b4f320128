#!/usr/bin/env python3
"""
EIT Parser - decode DVB Event Information Table records (.eit) into JSON

Reads the single-event EIT dumps that set-top boxes store next to their
recordings and prints the event id, start time, duration, running status,
short/extended event texts and components of each record.

Usage:
python3 eit_parser.py recording.eit [more.eit ...] [-o out.json] [--keep-going] [-v]
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum, IntEnum
from typing import Iterator, List, Optional, Tuple, Union
import argparse
import codecs
import logging
import os
import sys


logger = logging.getLogger("eit_parser")


# ==============================================================================
# Constants
# ==============================================================================

# event_id(2) + start_time(5) + duration(3) + status/loop length(2)
HEADER_SIZE = 12

# ETSI EN 300 468, table 12
SHORT_EVENT_DESCRIPTOR = 0x4D
EXTENDED_EVENT_DESCRIPTOR = 0x4E
COMPONENT_DESCRIPTOR = 0x50

COMPONENT_HEADER_SIZE = 6

# The .eit files written by receivers stay well below this
MAX_RECORD_SIZE = 2000

# Annex A.2: text without a leading control byte uses table 00
DEFAULT_ENCODING = "iso8859_1"

DYNAMIC_TABLE_SELECTOR = 0x10

# Annex A, table A.3 (single byte selector)
CHARACTER_TABLES = {
    0x01: "iso8859_5",
    0x02: "iso8859_6",
    0x03: "iso8859_7",
    0x04: "iso8859_8",
    0x05: "iso8859_9",
    0x06: "iso8859_10",
    0x07: "iso8859_11",
    0x09: "iso8859_13",
    0x0A: "iso8859_14",
    0x0B: "iso8859_15",
    0x11: "utf_16_be",  # ISO/IEC 10646 Basic Multilingual Plane
    0x13: "gb2312",
    0x15: "utf_8",
}

# Annex A, table A.4 (0x10 0x00 XX, dynamically selected part of ISO/IEC 8859)
DYNAMIC_CHARACTER_TABLES = {
    0x01: "iso8859_1",
    0x02: "iso8859_2",
    0x03: "iso8859_3",
    0x04: "iso8859_4",
    0x05: "iso8859_5",
    0x06: "iso8859_6",
    0x07: "iso8859_7",
    0x08: "iso8859_8",
    0x09: "iso8859_9",
    0x0A: "iso8859_10",
    0x0B: "iso8859_11",
    0x0D: "iso8859_13",
    0x0E: "iso8859_14",
    0x0F: "iso8859_15",
}


class RunningStatus(IntEnum):
    """running_status (table 6)"""
    UNDEFINED = 0
    NOT_RUNNING = 1
    STARTS_SOON = 2
    PAUSING = 3
    RUNNING = 4
    OFF_AIR = 5
    RESERVED_6 = 6
    RESERVED_7 = 7


# ==============================================================================
# Errors
# ==============================================================================

class EITDecodeError(Exception):
    """A record could not be decoded. ``offset`` is relative to the record start."""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} (offset {offset})")
        self.message = message
        self.offset = offset


class TruncatedRecordError(EITDecodeError):
    """A field declared by the record runs past the end of the buffer"""


class CharacterTableError(EITDecodeError):
    """Malformed character table selector"""


class UnsupportedItemsError(EITDecodeError):
    """Extended event descriptor with an item list"""


class UnknownDescriptorError(EITDecodeError):
    """Unknown descriptor tag followed by more data"""

    def __init__(self, message: str, offset: int, tag: int):
        super().__init__(message, offset)
        self.tag = tag


class TextConversionError(EITDecodeError):
    """Invalid byte sequence for the selected character table"""

    def __init__(self, message: str, offset: int, encoding: str):
        super().__init__(message, offset)
        self.encoding = encoding


class DanglingCarryoverError(EITDecodeError):
    """Undecoded text bytes left over from the previous record"""

    def __init__(self, message: str, offset: int, pending: bytes):
        super().__init__(message, offset)
        self.pending = pending


class RecordTooLargeError(EITDecodeError):
    """Input file does not fit the record size bound"""


# ==============================================================================
# Data Classes
# ==============================================================================

@dataclass(frozen=True)
class Duration:
    """BCD hh:mm:ss, each pair in 0..99 (not range checked)"""
    hour: int
    minute: int
    second: int

    def to_timedelta(self) -> timedelta:
        return timedelta(hours=self.hour, minutes=self.minute, seconds=self.second)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"


@dataclass(frozen=True)
class StartTime:
    """Event start in UTC. ``time`` shares the duration layout."""
    year: int
    month: int
    day: int
    time: Duration
    mjd: int
    is_undefined: bool = False

    def to_datetime(self) -> Optional[datetime]:
        """
        Convert to a naive datetime (UTC)

        Returns:
            Optional[datetime]: None when the decoded values are not a valid calendar time
        """
        if self.is_undefined:
            return None
        try:
            return datetime(self.year, self.month, self.day,
                            self.time.hour, self.time.minute, self.time.second)
        except ValueError:
            return None

    def __str__(self) -> str:
        return f"{self.year}/{self.month}/{self.day} {self.time}"


@dataclass(frozen=True)
class Descriptor:
    tag: int
    length: int
    offset: int


@dataclass(frozen=True)
class ShortEvent(Descriptor):
    """short_event_descriptor (6.2.37)"""
    index: int
    language_code: str
    event_name: str
    text: str


@dataclass(frozen=True)
class ExtendedEvent(Descriptor):
    """One fragment of an extended_event_descriptor block (6.2.15)"""
    descriptor_number: int
    last_descriptor_number: int
    language_code: Optional[str]
    text: str

    @property
    def is_last(self) -> bool:
        return self.descriptor_number == self.last_descriptor_number


@dataclass(frozen=True)
class Component(Descriptor):
    """component_descriptor (6.2.8); the text part is not decoded"""
    stream_content_ext: int
    stream_content: int
    component_type: int
    component_tag: int
    language_code: str


@dataclass(frozen=True)
class Unrecognized(Descriptor):
    pass


@dataclass
class ExtendedEventText:
    """Extended event fragments joined back into one logical text"""
    language_code: Optional[str]
    fragments: List[ExtendedEvent] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(f.text for f in self.fragments)

    @property
    def complete(self) -> bool:
        return bool(self.fragments) and self.fragments[-1].is_last


@dataclass(frozen=True)
class EventRecord:
    """One decoded EIT event"""
    event_id: int
    start_time: StartTime
    duration: Duration
    running_status: RunningStatus
    free_CA_mode: bool
    descriptors_loop_length: int
    descriptors: Tuple[Descriptor, ...]

    def short_events(self) -> List[ShortEvent]:
        return [d for d in self.descriptors if isinstance(d, ShortEvent)]

    def components(self) -> List[Component]:
        return [d for d in self.descriptors if isinstance(d, Component)]

    def extended_events(self) -> List[ExtendedEventText]:
        """
        Group extended event fragments into blocks

        A block starts at descriptor_number 0 and ends at the fragment whose
        descriptor_number equals last_descriptor_number. A block that never
        reaches its last fragment is returned with ``complete`` False.
        """
        blocks: List[ExtendedEventText] = []
        current: Optional[ExtendedEventText] = None

        for d in self.descriptors:
            if not isinstance(d, ExtendedEvent):
                continue
            if current is not None and d.descriptor_number == 0:
                blocks.append(current)
                current = None
            if current is None:
                current = ExtendedEventText(language_code=d.language_code)
            current.fragments.append(d)
            if d.is_last:
                blocks.append(current)
                current = None

        if current is not None:
            blocks.append(current)
        return blocks


@dataclass
class DecoderOptions:
    """Per-decoder settings"""
    default_encoding: str = DEFAULT_ENCODING


# ==============================================================================
# Utility Functions
# ==============================================================================

def bcd_to_decimal(bcd: int) -> int:
    """BCD (Binary Coded Decimal) digit pair to int, no range check"""
    return ((bcd >> 4) * 10) + (bcd & 0x0F)


def decode_bcd_triplet(data: bytes) -> Optional[Duration]:
    """
    Decode three packed BCD bytes (hh mm ss)

    EXAMPLE: 01:45:30 is coded as 0x014530

    Returns:
        Optional[Duration]: None when fewer than 3 bytes are available
    """
    if len(data) < 3:
        return None
    return Duration(bcd_to_decimal(data[0]), bcd_to_decimal(data[1]), bcd_to_decimal(data[2]))


def mjd_to_date(mjd: int) -> Tuple[int, int, int]:
    """
    MJD (Modified Julian Date) to year/month/day (ETSI EN 300 468 Annex C)

    Every step truncates like the reference formula does, so that dates
    match what broadcasters encode.
    """
    y_prime = int((mjd - 15078.2) / 365.25)
    m_prime = int((mjd - 14956.1 - int(y_prime * 365.25)) / 30.6001)
    day = mjd - 14956 - int(y_prime * 365.25) - int(m_prime * 30.6001)

    k = 1 if m_prime in (14, 15) else 0
    year = y_prime + k + 1900
    month = m_prime - 1 - k * 12
    return year, month, day


def decode_start_time(data: bytes) -> Optional[StartTime]:
    """
    Decode the 40-bit start_time field

    EXAMPLE: 93/10/13 12:45:00 is coded as 0xC079124500

    Returns:
        Optional[StartTime]: None when fewer than 5 bytes are available
    """
    if len(data) < 5:
        return None
    mjd = (data[0] << 8) | data[1]
    year, month, day = mjd_to_date(mjd)
    return StartTime(
        year=year,
        month=month,
        day=day,
        time=decode_bcd_triplet(data[2:5]),
        mjd=mjd,
        is_undefined=all(b == 0xFF for b in data[:5]),
    )


def iter_json_escaped(text: str) -> Iterator[str]:
    """Yield ``text`` character by character, escaping '"', '\\' and C0 controls as \\u00XX"""
    for ch in text:
        if ch == '"' or ch == "\\" or ch < "\x20":
            yield "\\u%04x" % ord(ch)
        else:
            yield ch


def escape_json_text(text: str) -> str:
    return "".join(iter_json_escaped(text))


# ==============================================================================
# DVB String Decoder
# ==============================================================================

def select_character_table(data: bytes, default: str = DEFAULT_ENCODING,
                           offset: int = 0) -> Tuple[str, int]:
    """
    Pick the character table of a text field from its leading bytes (Annex A)

    Args:
        data: text field bytes
        default: table used when the field carries no selector
        offset: record offset of ``data``, used in error reports

    Returns:
        tuple: (codec name, number of selector bytes consumed: 0, 1 or 3)
    """
    if not data or data[0] >= 0x20:
        return default, 0

    first = data[0]
    if first != DYNAMIC_TABLE_SELECTOR:
        encoding = CHARACTER_TABLES.get(first)
        if encoding is None:
            logger.debug("unmapped character table 0x%02x at offset %d, using %s", first, offset, default)
            return default, 1
        return encoding, 1

    if len(data) < 3:
        raise CharacterTableError(
            f"dynamically selected part of ISO/IEC 8859 needs 3 bytes, field has {len(data)}", offset)
    if data[1] != 0x00:
        raise CharacterTableError(
            f"first byte of ISO/IEC 8859 table id must be 0x00, got 0x{data[1]:02x}", offset + 1)

    encoding = DYNAMIC_CHARACTER_TABLES.get(data[2])
    if encoding is None:
        logger.debug("unmapped ISO/IEC 8859 part 0x%02x at offset %d, using %s", data[2], offset + 2, default)
        encoding = default
    return encoding, 3


class TextDecoder:
    """
    DVB text field decoder

    Holds the bytes of a multi-byte character that was cut off at the end
    of one extended event descriptor so that the next fragment can finish
    it. Call ``finish`` when a record ends; ``reset`` only clears.
    """

    def __init__(self, default_encoding: str = DEFAULT_ENCODING):
        self.default_encoding = default_encoding
        self.carryover = b""
        self.carryover_offset = 0

    def reset(self) -> None:
        if self.carryover:
            logger.debug("clearing %d undecoded byte(s)", len(self.carryover))
        self.carryover = b""
        self.carryover_offset = 0

    def finish(self) -> None:
        """Raise DanglingCarryoverError if the last field ended inside a character"""
        pending = self.carryover
        offset = self.carryover_offset
        self.reset()
        if pending:
            raise DanglingCarryoverError(
                f"text ends with {len(pending)} undecoded byte(s)", offset, pending)

    def decode(self, data: bytes, continuation: bool = False, offset: int = 0) -> str:
        """
        Decode one text field to str

        Args:
            data: field bytes including the character table selector
            continuation: field continues the previous one (carryover is prepended)
            offset: record offset of ``data``, used in error reports

        Returns:
            str: decoded text up to an incomplete trailing character, if any
        """
        encoding, consumed = select_character_table(data, self.default_encoding, offset)
        payload = bytes(data[consumed:])
        start = offset + consumed

        if self.carryover:
            if continuation:
                payload = self.carryover + payload
                start -= len(self.carryover)
            else:
                logger.warning("discarding %d undecoded byte(s) before field at offset %d",
                               len(self.carryover), offset)
            self.carryover = b""

        decoder = codecs.getincrementaldecoder(encoding)(errors="strict")
        try:
            text = decoder.decode(payload, final=False)
        except UnicodeDecodeError as exc:
            raise TextConversionError(
                f"invalid {encoding} sequence {payload[exc.start:exc.end]!r}",
                max(start + exc.start, 0), encoding) from exc

        # incomplete sequence at the end of the field
        pending = decoder.getstate()[0]
        if pending:
            logger.debug("field at offset %d ends inside a character, keeping %d byte(s)",
                         offset, len(pending))
            self.carryover = bytes(pending)
            self.carryover_offset = max(start + len(payload) - len(pending), 0)
        return text


# ==============================================================================
# Descriptor Parser
# ==============================================================================

class WalkerState(Enum):
    SCANNING = "scanning"
    DONE = "done"
    FAILED = "failed"


class DescriptorWalker:
    """
    Iterate the descriptor loop of one record

    Known descriptors are consumed field by field; only the component
    payload is skipped by its declared length. An unknown tag followed by
    more data stops the walk since its length cannot be trusted.
    """

    def __init__(self, data: bytes, offset: int, text_decoder: TextDecoder):
        self.data = data
        self.offset = offset
        self.text = text_decoder
        self.state = WalkerState.SCANNING
        self.short_event_count = 0

    def __iter__(self) -> Iterator[Descriptor]:
        try:
            while self.offset < len(self.data):
                yield self._next_descriptor()
        except EITDecodeError:
            self.state = WalkerState.FAILED
            raise
        self.state = WalkerState.DONE

    def _read(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise TruncatedRecordError(
                f"need {size} byte(s), {len(self.data) - self.offset} left", self.offset)
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def _read_byte(self) -> int:
        return self._read(1)[0]

    def _read_text(self, continuation: bool = False) -> str:
        length = self._read_byte()
        start = self.offset
        return self.text.decode(self._read(length), continuation, start)

    def _next_descriptor(self) -> Descriptor:
        start = self.offset
        tag = self._read_byte()
        length = self._read_byte()

        if tag == SHORT_EVENT_DESCRIPTOR:
            return self._short_event(tag, length, start)
        elif tag == EXTENDED_EVENT_DESCRIPTOR:
            return self._extended_event(tag, length, start)
        elif tag == COMPONENT_DESCRIPTOR:
            return self._component(tag, length, start)

        bytes_left = len(self.data) - self.offset
        if bytes_left > 0:
            raise UnknownDescriptorError(
                f"unknown descriptor_tag 0x{tag:02x}, descriptor_length={length}, bytes left = {bytes_left}",
                start, tag)
        logger.debug("unparsed descriptor_tag 0x%02x at end of record", tag)
        return Unrecognized(tag=tag, length=length, offset=start)

    def _short_event(self, tag: int, length: int, start: int) -> ShortEvent:
        self.short_event_count += 1
        language_code = self._read(3).decode("latin_1")
        event_name = self._read_text()
        text = self._read_text()
        return ShortEvent(tag=tag, length=length, offset=start,
                          index=self.short_event_count,
                          language_code=language_code,
                          event_name=event_name,
                          text=text)

    def _extended_event(self, tag: int, length: int, start: int) -> ExtendedEvent:
        numbers = self._read_byte()
        descriptor_number = numbers >> 4
        last_descriptor_number = numbers & 0x0F

        # present in every fragment, reported for the first one only
        language = self._read(3).decode("latin_1")
        language_code = language if descriptor_number == 0 else None

        items_offset = self.offset
        length_of_items = self._read_byte()
        if length_of_items > 0:
            raise UnsupportedItemsError(
                f"extended event item list ({length_of_items} bytes) is not supported", items_offset)

        text = self._read_text(continuation=descriptor_number > 0)
        return ExtendedEvent(tag=tag, length=length, offset=start,
                             descriptor_number=descriptor_number,
                             last_descriptor_number=last_descriptor_number,
                             language_code=language_code,
                             text=text)

    def _component(self, tag: int, length: int, start: int) -> Component:
        if length < COMPONENT_HEADER_SIZE:
            raise TruncatedRecordError(
                f"component descriptor length {length} is shorter than its header", start + 1)
        header = self._read(COMPONENT_HEADER_SIZE)
        # component text is not decoded
        self._read(length - COMPONENT_HEADER_SIZE)
        return Component(tag=tag, length=length, offset=start,
                         stream_content_ext=header[0] >> 4,
                         stream_content=header[0] & 0x0F,
                         component_type=header[1],
                         component_tag=header[2],
                         language_code=header[3:6].decode("latin_1"))


class EventDecoder:
    """EIT (Event Information Table) record decoder"""

    def __init__(self, options: Optional[DecoderOptions] = None):
        self.options = options or DecoderOptions()
        self.text = TextDecoder(self.options.default_encoding)

    def decode(self, data: Union[bytes, bytearray]) -> EventRecord:
        """
        Decode one record

        Args:
            data: record bytes, header first

        Returns:
            EventRecord: decoded event

        Raises:
            EITDecodeError: the record is malformed or uses unsupported structure
        """
        self.text.reset()
        data = bytes(data)

        if len(data) < HEADER_SIZE:
            raise TruncatedRecordError(
                f"record has {len(data)} bytes, header needs {HEADER_SIZE}", len(data))

        event_id = (data[0] << 8) | data[1]
        start_time = decode_start_time(data[2:7])
        duration = decode_bcd_triplet(data[7:10])

        running_status = RunningStatus(data[10] >> 5)
        free_CA_mode = bool((data[10] >> 4) & 0x01)
        descriptors_loop_length = ((data[10] & 0x0F) << 8) | data[11]

        if HEADER_SIZE + descriptors_loop_length != len(data):
            logger.debug("descriptors_loop_length %d does not match %d remaining bytes",
                         descriptors_loop_length, len(data) - HEADER_SIZE)

        walker = DescriptorWalker(data, HEADER_SIZE, self.text)
        descriptors = tuple(walker)
        self.text.finish()

        return EventRecord(
            event_id=event_id,
            start_time=start_time,
            duration=duration,
            running_status=running_status,
            free_CA_mode=free_CA_mode,
            descriptors_loop_length=descriptors_loop_length,
            descriptors=descriptors,
        )


def decode_event(data: Union[bytes, bytearray], options: Optional[DecoderOptions] = None) -> EventRecord:
    """Decode one record with a fresh decoder"""
    return EventDecoder(options).decode(data)


# ==============================================================================
# JSON Output
# ==============================================================================

# Built by hand: quotes and backslashes must come out as \u00XX escapes, which json.dump never emits.

def _json_string(text: str) -> str:
    return '"' + escape_json_text(text) + '"'


def _render_object(members: List[Tuple[str, str]], indent: str) -> str:
    """Closing brace goes at ``indent``, members two spaces deeper"""
    inner = indent + "  "
    lines = [f"{inner}{_json_string(k)}: {v}" for k, v in members]
    return "{\n" + ",\n".join(lines) + "\n" + indent + "}"


def record_members(record: EventRecord) -> List[Tuple[str, str]]:
    """
    Top level key/value pairs of a record, values already in JSON form

    Keys follow the usual .eit JSON dump layout: numbered
    short_event_descriptor_N objects and one extended_event_descriptor
    object per reassembled block.
    """
    nested = "   "
    members = [
        ("event_id", str(record.event_id)),
        ("start_time", _json_string(str(record.start_time))),
        ("duration", _json_string(str(record.duration))),
        ("running_status", str(int(record.running_status))),
        ("free_CA_mode", str(int(record.free_CA_mode))),
    ]

    for short in record.short_events():
        members.append((f"short_event_descriptor_{short.index}", _render_object([
            ("iso_639_2_language_code", _json_string(short.language_code)),
            ("event_name", _json_string(short.event_name)),
            ("text", _json_string(short.text)),
        ], nested)))

    for n, block in enumerate(record.extended_events(), start=1):
        key = "extended_event_descriptor" if n == 1 else f"extended_event_descriptor_{n}"
        members.append((key, _render_object([
            ("iso_639_2_language_code", _json_string(block.language_code or "")),
            ("text", _json_string(block.text)),
        ], nested)))

    components = record.components()
    if components:
        rendered = [nested + "  " + _render_object([
            ("stream_content_ext", str(c.stream_content_ext)),
            ("stream_content", str(c.stream_content)),
            ("component_type", str(c.component_type)),
            ("component_tag", str(c.component_tag)),
            ("iso_639_2_language_code", _json_string(c.language_code)),
        ], nested + "  ") for c in components]
        members.append(("components", "[\n" + ",\n".join(rendered) + "\n" + nested + "]"))

    return members


def render_record(record: EventRecord, filename: Optional[str] = None) -> str:
    """Render one record as a JSON object"""
    members = []
    if filename is not None:
        members.append(("filename", _json_string(filename)))
    members.extend(record_members(record))
    return " " + _render_object(members, " ")


def render_records(rendered: List[str]) -> str:
    """Wrap several rendered records in a JSON array"""
    return "[\n" + ",\n".join(rendered) + "\n]"


# ==============================================================================
# Main
# ==============================================================================

def read_record(path: str, max_size: int = MAX_RECORD_SIZE) -> bytes:
    """Read one .eit file, refusing files that reach ``max_size``"""
    with open(path, "rb") as f:
        data = f.read(max_size)
    if len(data) >= max_size:
        raise RecordTooLargeError(
            f"{path} has at least {max_size} bytes, probably not an EIT record", max_size)
    return data


def _resolve_log_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    raw = os.environ.get("EIT_PARSER_LOG_LEVEL", "")
    if not raw:
        return logging.WARNING
    return getattr(logging, raw.upper(), logging.WARNING)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eit-parser",
        description="EIT Parser - dump DVB Event Information Table (.eit) files as JSON"
    )
    parser.add_argument("files", nargs="+", metavar="FILE", help="Input .eit file(s)")
    parser.add_argument("-o", "--output", help="Output JSON file (default: stdout)")
    parser.add_argument("--keep-going", action="store_true", help="Skip files that fail to decode instead of stopping")
    parser.add_argument("--max-size", type=int, default=MAX_RECORD_SIZE, help=f"Reject files of this size or larger (default: {MAX_RECORD_SIZE})")
    parser.add_argument("--default-encoding", default=DEFAULT_ENCODING, help=f"Codec for text without a character table byte (default: {DEFAULT_ENCODING})")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More log output (-vv for debug)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=_resolve_log_level(args.verbose),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        codecs.lookup(args.default_encoding)
    except LookupError:
        logger.error("unknown encoding: %s", args.default_encoding)
        return 2

    options = DecoderOptions(default_encoding=args.default_encoding)
    rendered: List[str] = []
    failed = 0

    for path in args.files:
        try:
            data = read_record(path, args.max_size)
            record = EventDecoder(options).decode(data)
        except (OSError, EITDecodeError) as exc:
            logger.error("%s: %s", path, exc)
            if not args.keep_going:
                return 1
            failed += 1
            continue
        logger.info("%s: event %d, %d descriptor(s)", path, record.event_id, len(record.descriptors))
        rendered.append(render_record(record, path))

    if len(args.files) > 1:
        output = render_records(rendered)
    elif rendered:
        output = rendered[0]
    else:
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        logger.info("JSON output written to: %s", args.output)
    else:
        print(output)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
