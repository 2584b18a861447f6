import pytest

from novex.mouse import DEFAULT_HEIGHT, DEFAULT_WIDTH, MouseDecoder

MOUSE = 0x21


def send(decoder, header, dx, dy):
    results = [
        decoder.feed(MOUSE, header),
        decoder.feed(MOUSE, dx),
        decoder.feed(MOUSE, dy),
    ]
    return results


def test_starts_centred():
    decoder = MouseDecoder()
    assert decoder.x() == DEFAULT_WIDTH // 2
    assert decoder.y() == DEFAULT_HEIGHT // 2
    assert decoder.buttons() == 0


def test_set_bounds_recentres():
    decoder = MouseDecoder()
    decoder.set_bounds(200, 100)
    assert (decoder.x(), decoder.y()) == (100, 50)


def test_packet_completes_on_third_byte():
    decoder = MouseDecoder()
    assert send(decoder, 0x08, 0, 0) == [False, False, True]


def test_move_right_is_doubled():
    decoder = MouseDecoder()
    start = decoder.x()
    send(decoder, 0x08, 5, 0)
    assert decoder.x() - start == 10
    assert decoder.y() == DEFAULT_HEIGHT // 2


def test_negative_x_moves_left():
    decoder = MouseDecoder()
    start = decoder.x()
    send(decoder, 0x18, 0xFB, 0)
    assert decoder.x() < start


def test_positive_y_moves_up_on_screen():
    decoder = MouseDecoder()
    start = decoder.y()
    send(decoder, 0x08, 0, 3)
    assert decoder.y() < start


def test_negative_y_moves_down_on_screen():
    decoder = MouseDecoder()
    start = decoder.y()
    send(decoder, 0x28, 0, 0xFD)
    assert decoder.y() > start


def test_buttons_from_header():
    decoder = MouseDecoder()
    send(decoder, 0x08 | 0x01, 0, 0)
    assert decoder.buttons() == 0x01
    send(decoder, 0x08 | 0x06, 0, 0)
    assert decoder.buttons() == 0x06


def test_clamped_to_upper_bounds():
    max_x, max_y = 100, 50
    decoder = MouseDecoder()
    decoder.set_bounds(max_x, max_y)
    for _ in range(5):
        send(decoder, 0x28, 127, 0x81)
    assert decoder.x() == max_x - 1
    assert decoder.y() == max_y - 1


def test_clamped_to_zero():
    decoder = MouseDecoder()
    decoder.set_bounds(100, 50)
    for _ in range(5):
        send(decoder, 0x18, 0x81, 127)
    assert (decoder.x(), decoder.y()) == (0, 0)


def test_bytes_without_mouse_status_are_ignored():
    decoder = MouseDecoder()
    start = (decoder.x(), decoder.y())
    assert decoder.feed(0x01, 0x08) is False
    assert decoder.feed(0x01, 50) is False
    assert decoder.feed(0x01, 50) is False
    assert (decoder.x(), decoder.y()) == start


def test_header_without_sync_bit_is_dropped():
    decoder = MouseDecoder()
    start = decoder.x()
    assert decoder.feed(MOUSE, 0x00) is False
    # The stream resynchronises on the next valid header.
    assert send(decoder, 0x08, 4, 0) == [False, False, True]
    assert decoder.x() > start


def test_out_of_range_byte_rejected():
    decoder = MouseDecoder()
    with pytest.raises(ValueError):
        decoder.feed(MOUSE, 256)