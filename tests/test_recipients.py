from event_connect.services.recipients import parse_recipients


def test_drops_blank_segments_and_trims():
    assert parse_recipients("a@x.com;;  b@y.com ") == ["a@x.com", "b@y.com"]


def test_count_matches_non_empty_trimmed_segments():
    raw = " one@x.com ; ;two@x.com;   ;three@x.com;"
    expected = [s.strip() for s in raw.split(";") if s.strip()]
    assert parse_recipients(raw) == expected
    assert len(parse_recipients(raw)) == 3


def test_keeps_duplicates():
    assert parse_recipients("a@x.com;a@x.com") == ["a@x.com", "a@x.com"]


def test_does_not_validate_syntax():
    assert parse_recipients("not-an-email; also bad") == ["not-an-email", "also bad"]


def test_empty_and_none_parse_to_empty_list():
    assert parse_recipients("") == []
    assert parse_recipients(None) == []
    assert parse_recipients(" ; ; ") == []
