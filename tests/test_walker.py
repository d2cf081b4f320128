import pytest

from eit_parser import (
    Component,
    DanglingCarryoverError,
    DecoderOptions,
    DescriptorWalker,
    EventDecoder,
    ExtendedEvent,
    RunningStatus,
    ShortEvent,
    TextDecoder,
    TruncatedRecordError,
    UnknownDescriptorError,
    UnsupportedItemsError,
    Unrecognized,
    WalkerState,
    decode_event,
)
from eit_builders import (
    COMPONENT,
    component,
    descriptor,
    extended_event,
    header,
    record,
    short_event,
)


def walk(data):
    walker = DescriptorWalker(data, 0, TextDecoder())
    return walker, list(walker)


# ---------------------------------------------------------------------------
# descriptor loop
# ---------------------------------------------------------------------------

def test_single_short_event():
    walker, descriptors = walk(short_event(b"Tagesschau", b"Nachrichten"))
    assert walker.state is WalkerState.DONE
    assert len(descriptors) == 1
    d = descriptors[0]
    assert isinstance(d, ShortEvent)
    assert d.index == 1
    assert d.language_code == "deu"
    assert d.event_name == "Tagesschau"
    assert d.text == "Nachrichten"
    assert d.offset == 0


def test_empty_loop_is_done():
    walker, descriptors = walk(b"")
    assert walker.state is WalkerState.DONE
    assert descriptors == []


def test_short_events_are_numbered():
    data = short_event(b"News", b"", lang=b"eng") + short_event(b"Nachrichten", b"", lang=b"deu")
    _, descriptors = walk(data)
    assert [d.index for d in descriptors] == [1, 2]
    assert [d.language_code for d in descriptors] == ["eng", "deu"]


def test_extended_event_fragments():
    data = (extended_event(0, 1, b"\x15Erster Teil, gr\xc3")
            + extended_event(1, 1, b"\x15\xbc\xc3\x9fe"))
    walker, descriptors = walk(data)
    assert walker.state is WalkerState.DONE
    first, second = descriptors
    assert isinstance(first, ExtendedEvent)
    assert (first.descriptor_number, first.last_descriptor_number) == (0, 1)
    assert first.language_code == "deu"
    assert not first.is_last
    assert second.language_code is None
    assert second.is_last
    assert first.text + second.text == "Erster Teil, grüße"
    assert second.offset == len(extended_event(0, 1, b"\x15Erster Teil, gr\xc3"))


def test_extended_event_items_are_fatal():
    data = short_event(b"Film", b"") + extended_event(0, 0, b"text", items=b"\x02ab")
    walker = DescriptorWalker(data, 0, TextDecoder())
    with pytest.raises(UnsupportedItemsError) as info:
        list(walker)
    assert info.value.offset == len(short_event(b"Film", b"")) + 6
    assert walker.state is WalkerState.FAILED


def test_component_payload_is_skipped():
    data = component(stream_content=0x02, component_type=0x03, tag=0x11, lang=b"fra",
                     text=b"Stereo", ext=0xF) + short_event(b"A", b"B")
    _, descriptors = walk(data)
    c, s = descriptors
    assert isinstance(c, Component)
    assert c.stream_content_ext == 0xF
    assert c.stream_content == 0x02
    assert c.component_type == 0x03
    assert c.component_tag == 0x11
    assert c.language_code == "fra"
    assert c.length == 12
    assert isinstance(s, ShortEvent)
    assert s.offset == 14


def test_component_shorter_than_header():
    with pytest.raises(TruncatedRecordError):
        walk(descriptor(COMPONENT, b"\x01\x03\x01"))


def test_component_payload_past_end():
    data = component(text=b"Stereo")[:-2]
    with pytest.raises(TruncatedRecordError):
        walk(data)


def test_unknown_tag_with_trailing_bytes_is_fatal():
    data = short_event(b"A", b"B") + descriptor(0x54, b"\x30\x00")
    walker = DescriptorWalker(data, 0, TextDecoder())
    with pytest.raises(UnknownDescriptorError) as info:
        list(walker)
    assert info.value.tag == 0x54
    assert info.value.offset == len(short_event(b"A", b"B"))
    assert walker.state is WalkerState.FAILED


def test_unknown_tag_at_end_is_unrecognized():
    walker, descriptors = walk(short_event(b"A", b"B") + b"\x54\x00")
    assert walker.state is WalkerState.DONE
    assert descriptors[-1] == Unrecognized(tag=0x54, length=0, offset=9)


def test_truncated_short_event():
    data = short_event(b"Tagesschau", b"Nachrichten")[:-3]
    with pytest.raises(TruncatedRecordError):
        walk(data)


def test_lone_tag_byte_is_truncated():
    with pytest.raises(TruncatedRecordError) as info:
        walk(short_event(b"A", b"B") + b"\x4d")
    assert info.value.offset == 10


# ---------------------------------------------------------------------------
# whole records
# ---------------------------------------------------------------------------

def test_decode_header_fields():
    rec = decode_event(record(short_event(b"A", b"B"), event_id=0xBEEF,
                              duration=(1, 45, 30), running_status=4, free_CA_mode=True))
    assert rec.event_id == 0xBEEF
    assert (rec.start_time.year, rec.start_time.month, rec.start_time.day) == (1993, 10, 13)
    assert str(rec.duration) == "01:45:30"
    assert rec.running_status is RunningStatus.RUNNING
    assert rec.free_CA_mode is True
    assert rec.descriptors_loop_length == len(short_event(b"A", b"B"))


def test_decode_header_only():
    rec = decode_event(header(running_status=1))
    assert rec.running_status is RunningStatus.NOT_RUNNING
    assert rec.free_CA_mode is False
    assert rec.descriptors == ()


def test_decode_short_header():
    with pytest.raises(TruncatedRecordError):
        decode_event(header()[:11])


def test_decode_full_record():
    data = record(
        short_event(b"\x15Tatort", b"\x15Krimi"),
        extended_event(0, 2, b"\x15Kommissarin "),
        extended_event(1, 2, b"\x15Lena Odenthal ermittelt in Ludwigshafen. Sie tr\xc3"),
        extended_event(2, 2, b"\x15\xa4gt ..."),
        component(),
        component(stream_content=0x02, component_type=0x01, tag=0x02),
    )
    rec = decode_event(data)
    assert [s.event_name for s in rec.short_events()] == ["Tatort"]
    assert len(rec.components()) == 2

    blocks = rec.extended_events()
    assert len(blocks) == 1
    assert blocks[0].complete
    assert blocks[0].language_code == "deu"
    assert blocks[0].text == "Kommissarin Lena Odenthal ermittelt in Ludwigshafen. Sie trägt ..."


def test_extended_events_separate_blocks():
    rec = decode_event(record(
        extended_event(0, 0, b"first", lang=b"deu"),
        extended_event(0, 1, b"second ", lang=b"eng"),
        extended_event(1, 1, b"block", lang=b"eng"),
    ))
    blocks = rec.extended_events()
    assert [b.text for b in blocks] == ["first", "second block"]
    assert [b.language_code for b in blocks] == ["deu", "eng"]
    assert all(b.complete for b in blocks)


def test_unterminated_extended_block():
    rec = decode_event(record(extended_event(0, 3, b"cut off")))
    blocks = rec.extended_events()
    assert len(blocks) == 1
    assert not blocks[0].complete
    assert blocks[0].text == "cut off"


def test_items_length_never_gives_partial_record():
    with pytest.raises(UnsupportedItemsError):
        decode_event(record(short_event(b"A", b"B"), extended_event(0, 0, b"", items=b"\x00")))


def test_last_fragment_ending_inside_character_fails_its_own_record():
    decoder = EventDecoder()
    with pytest.raises(DanglingCarryoverError) as info:
        decoder.decode(record(extended_event(0, 0, b"\x15Gr\xc3")))
    assert info.value.pending == b"\xc3"
    # header 12, descriptor header 2, numbers/language/items/length 6, selector 1, "Gr" 2
    assert info.value.offset == 23

    # the same decoder goes on with the next record
    rec = decoder.decode(record(short_event(b"A", b"B")))
    assert rec.short_events()[0].text == "B"


def test_unterminated_block_ending_inside_character_fails():
    with pytest.raises(DanglingCarryoverError):
        decode_event(record(extended_event(0, 1, b"\x15Gr\xc3")))


def test_decoder_recovers_after_failed_walk():
    decoder = EventDecoder()
    with pytest.raises(UnknownDescriptorError):
        decoder.decode(record(extended_event(0, 1, b"\x15Gr\xc3"), descriptor(0x54, b"\x30\x00")))
    rec = decoder.decode(record(short_event(b"A", b"B")))
    assert rec.short_events()[0].event_name == "A"


def test_decoder_default_encoding_option():
    rec = decode_event(record(short_event(b"\x80", b"")), DecoderOptions(default_encoding="cp1252"))
    assert rec.short_events()[0].event_name == "€"
