import pytest

from resumeflow.render.inline import EmphasisSegment, parse_inline_emphasis


def test_empty_input_yields_no_segments():
    assert parse_inline_emphasis('') == []


def test_plain_text_is_single_segment():
    assert parse_inline_emphasis('just words') == [EmphasisSegment('just words', False)]


def test_bold_run_in_the_middle():
    assert parse_inline_emphasis('Built **fast** apps') == [
        EmphasisSegment('Built ', False),
        EmphasisSegment('fast', True),
        EmphasisSegment(' apps', False),
    ]


def test_leading_bold_run():
    assert parse_inline_emphasis('**Lead** tail') == [
        EmphasisSegment('Lead', True),
        EmphasisSegment(' tail', False),
    ]


def test_unterminated_emphasis_keeps_flag_to_the_end():
    assert parse_inline_emphasis('plain **still bold') == [
        EmphasisSegment('plain ', False),
        EmphasisSegment('still bold', True),
    ]


def test_adjacent_delimiters_do_not_produce_empty_segments():
    assert parse_inline_emphasis('****x') == [EmphasisSegment('x', False)]


def test_single_star_is_ordinary_text():
    assert parse_inline_emphasis('a * b') == [EmphasisSegment('a * b', False)]


def test_custom_delimiter():
    assert parse_inline_emphasis('a __b__ c', delimiter='__') == [
        EmphasisSegment('a ', False),
        EmphasisSegment('b', True),
        EmphasisSegment(' c', False),
    ]


@pytest.mark.parametrize(
    'text',
    [
        'Cut costs by **30%** in **two** quarters',
        '**all bold**',
        'no markup at all',
        '**a****b** c',
    ],
)
def test_concatenated_segments_reproduce_text_without_delimiters(text):
    segments = parse_inline_emphasis(text)
    assert ''.join(segment.text for segment in segments) == text.replace('**', '')
