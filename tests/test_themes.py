import json

import pytest
from pydantic import ValidationError

from conftest import FixedWidthBackend, texts
from resumeflow.errors import MissingThemeField
from resumeflow.runner import compose_primitives
from resumeflow.themes import BUILTIN_THEMES, get_theme, load_theme
from resumeflow.types import BulletSection, ExperienceSection, HeaderSection, SummarySection, Theme, parse_document


def test_builtin_theme_keys():
    assert sorted(BUILTIN_THEMES) == ['classic', 'compact', 'creative', 'creative2', 'modern', 'terminal']


@pytest.mark.parametrize('key', sorted(BUILTIN_THEMES))
def test_every_builtin_theme_composes_the_sample(key, sample_document):
    backend = compose_primitives(get_theme(key), sample_document, backend=FixedWidthBackend())
    assert backend.page_count == 1
    assert len(backend.primitives) > 20


def test_get_theme_normalises_key():
    assert get_theme('  Terminal ').key == 'terminal'


def test_unknown_theme_key_raises():
    with pytest.raises(KeyError, match='neon'):
        get_theme('neon')


def test_load_theme_from_json_file(tmp_path):
    raw = get_theme('classic').model_dump(mode='json')
    raw.update(key='classic-wide', name='Classic Wide', margin=25)
    path = tmp_path / 'wide.json'
    path.write_text(json.dumps(raw), encoding='utf-8')

    theme = load_theme(path)
    assert theme.key == 'classic-wide'
    assert theme.margin == 25
    assert theme.header.centered_name is True
    assert theme.color('name') == (44, 62, 80)
    assert theme.divider_after_header.width == 1.5


def test_load_theme_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_theme(tmp_path / 'nope.json')


def test_theme_rejects_unknown_capability():
    raw = get_theme('modern').model_dump()
    raw['sparkles'] = True
    with pytest.raises(ValidationError):
        Theme.model_validate(raw)


def test_accessors_raise_missing_theme_field():
    theme = get_theme('modern')
    with pytest.raises(MissingThemeField) as excinfo:
        theme.font_size('h4')
    assert excinfo.value.group == 'fonts'
    assert excinfo.value.key == 'h4'
    assert 'Modern Professional' in str(excinfo.value)
    assert isinstance(excinfo.value, KeyError)


def test_first_color_walks_the_fallback_chain():
    assert get_theme('compact').first_color('bullet_color', 'text') == (37, 99, 235)
    assert get_theme('terminal').first_color('bullet_color', 'prefix_green', 'text') == (126, 231, 135)
    assert get_theme('modern').first_color('bullet_color', 'prefix_green', 'text') == (71, 85, 105)
    with pytest.raises(MissingThemeField):
        get_theme('modern').first_color('accent', 'highlight')


def test_parse_document_accepts_bare_section_list():
    document = parse_document([{'type': 'summary', 'text': 'Hello'}])
    assert document.sections == [SummarySection(text='Hello')]


def test_parse_document_flattens_nested_content():
    document = parse_document(
        {
            'sections': [
                {'type': 'header', 'content': {'name': 'Jane Doe', 'contact': 'jane@x.com'}},
                {'type': 'section', 'content': {'title': 'Skills', 'bullets': ['Go']}},
                {
                    'type': 'experience',
                    'content': {'title': 'Work', 'jobs': [{'company': 'Acme', 'roles': [{'title': 'Dev'}]}]},
                },
            ]
        }
    )
    header, skills, work = document.sections
    assert isinstance(header, HeaderSection) and header.contact == 'jane@x.com'
    assert isinstance(skills, BulletSection) and skills.bullets == ['Go']
    assert isinstance(work, ExperienceSection)
    assert work.jobs[0].roles[0].title == 'Dev'
    assert work.jobs[0].roles[0].bullets == []


def test_parse_document_rejects_unknown_section_type():
    with pytest.raises(ValidationError):
        parse_document([{'type': 'portfolio', 'title': 'Work'}])


CAMEL_TERMINAL = {
    'name': 'Terminal/Hacker',
    'margin': 15,
    'spacing': {
        'headerBottomMargin': 12,
        'h1MarginBottom': 4,
        'subHeaderMarginBottom': 12,
        'h2MarginTop': 12,
        'h2MarginBottom': 6,
        'h3MarginTop': 8,
        'jobHeaderMarginBottom': 4,
        'ulMarginTop': 4,
        'ulMarginBottom': 10,
        'liMarginBottom': 3,
    },
    'fonts': {'h1': 16, 'subHeader': 7, 'h2': 9, 'h3': 8.5, 'li': 8.5, 'body': 9},
    'lineHeights': {'li': 1.5, 'body': 1.4},
    'colors': {
        'bg': [13, 17, 23],
        'name': [88, 166, 255],
        'role': [139, 148, 158],
        'heading': [126, 231, 135],
        'text': [201, 209, 217],
        'prefixGreen': [126, 231, 135],
        'prefixGray': [139, 148, 158],
    },
    'prefixes': {'h1': '$ whoami > ', 'subHeader': '# ', 'h2': '[>] ', 'h3': '|-- ', 'jobMeta': '// ', 'bullet': '> '},
    'images': None,
}


def test_camel_case_theme_file_loads(tmp_path):
    path = tmp_path / 'hacker.json'
    path.write_text(json.dumps(CAMEL_TERMINAL), encoding='utf-8')

    theme = load_theme(path)
    assert theme.key == 'hacker'
    assert theme.spacing_px('h1_margin_bottom') == 4
    assert theme.spacing_px('section_margin_bottom') == 0
    assert theme.font_size('sub_header') == 7
    assert theme.line_height('body') == 1.4
    assert theme.color('prefix_green') == (126, 231, 135)
    assert theme.prefix('job_meta') == '// '


def test_camel_case_theme_lays_out_like_the_builtin(tmp_path, sample_document):
    path = tmp_path / 'hacker.json'
    path.write_text(json.dumps(CAMEL_TERMINAL), encoding='utf-8')

    loaded = compose_primitives(load_theme(path), sample_document, backend=FixedWidthBackend())
    builtin = compose_primitives(get_theme('terminal'), sample_document, backend=FixedWidthBackend())

    def layout(backend):
        return [(item.text, item.x, item.y, item.color) for item in texts(backend)]

    assert layout(loaded) == layout(builtin)


def test_camel_case_capabilities():
    raw = get_theme('modern').model_dump(mode='json', exclude={'divider_after_header', 'images', 'bullet_shape'})
    raw['dividerAfterHeader'] = {'color': [0, 0, 0], 'width': 1.5, 'gap': 4}
    raw['images'] = {'headerBar': '/bar.png', 'sectionBarOffset': -3}
    raw['bulletShape'] = 'diamond'

    theme = Theme.model_validate(raw)
    assert theme.divider_after_header.width == 1.5
    assert theme.images.header_bar == '/bar.png'
    assert theme.images.section_bar_offset == -3
    assert theme.bullet_shape == 'diamond'
