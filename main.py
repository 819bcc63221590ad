from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from resumeflow.config import get_settings
from resumeflow.render.primitives import PageGeometry, primitive_to_dict
from resumeflow.runner import compose_document, page_geometry, render_document
from resumeflow.storage import default_output_path, read_json, write_bytes_atomic, write_json_atomic
from resumeflow.themes import BUILTIN_THEMES, load_theme
from resumeflow.types import Document, Theme, parse_document


def _print_json(payload: dict | list) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _configure_logging() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, str(settings.log_level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def _load_inputs(args: argparse.Namespace) -> tuple[Theme, Document] | None:
    settings = get_settings()
    document_path = Path(args.document).expanduser().resolve()
    if not document_path.is_file():
        _print_json({'status': 'error', 'message': f'Document not found: {document_path}'})
        return None
    try:
        document = parse_document(read_json(document_path))
        theme = load_theme(args.theme or settings.default_theme)
    except (ValidationError, ValueError) as exc:
        _print_json({'status': 'error', 'message': f'Invalid input: {exc}'})
        return None
    except (KeyError, FileNotFoundError) as exc:
        _print_json({'status': 'error', 'message': str(exc).strip("'\"")})
        return None
    return theme, document


def _page_from_args(args: argparse.Namespace) -> PageGeometry:
    page = page_geometry(get_settings())
    width = args.page_width if args.page_width is not None else page.width
    height = args.page_height if args.page_height is not None else page.height
    return PageGeometry(width=float(width), height=float(height))


def cmd_render(args: argparse.Namespace) -> int:
    loaded = _load_inputs(args)
    if loaded is None:
        return 2
    theme, document = loaded

    result = render_document(theme, document, page=_page_from_args(args))
    output_path = Path(args.output).expanduser() if args.output else default_output_path(Path(args.document).stem)
    write_bytes_atomic(output_path, result.pdf_bytes)

    _print_json(
        {
            'status': 'ok',
            'theme': theme.key,
            'output_path': str(output_path),
            'page_count': result.page_count,
            'primitive_count': len(result.primitives),
            'bytes': len(result.pdf_bytes),
        }
    )
    return 0


def cmd_primitives(args: argparse.Namespace) -> int:
    loaded = _load_inputs(args)
    if loaded is None:
        return 2
    theme, document = loaded

    backend = compose_document(theme, document, page=_page_from_args(args))
    stream = [primitive_to_dict(item) for item in backend.primitives]
    if args.output:
        output_path = Path(args.output).expanduser()
        write_json_atomic(output_path, stream)
        _print_json({'status': 'ok', 'output_path': str(output_path), 'primitive_count': len(stream)})
        return 0
    _print_json(stream)
    return 0


def cmd_themes(args: argparse.Namespace) -> int:
    _print_json(
        [
            {'key': theme.key, 'name': theme.name, 'font_family': theme.font_family}
            for theme in BUILTIN_THEMES.values()
        ]
    )
    return 0


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--document', required=True, help='Path to the document JSON')
    parser.add_argument('--theme', required=False, help='Built-in theme key or theme JSON path')
    parser.add_argument('--page-width', type=float, required=False, help='Page width in millimetres')
    parser.add_argument('--page-height', type=float, required=False, help='Page height in millimetres')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='resumeflow themed resume renderer')
    sub = parser.add_subparsers(dest='command', required=True)

    render = sub.add_parser('render', help='Render a document to PDF')
    _add_input_arguments(render)
    render.add_argument('--output', required=False, help='Output PDF path')
    render.set_defaults(func=cmd_render)

    primitives = sub.add_parser('primitives', help='Print the drawing primitive stream as JSON')
    _add_input_arguments(primitives)
    primitives.add_argument('--output', required=False, help='Write the stream to this JSON file instead of stdout')
    primitives.set_defaults(func=cmd_primitives)

    themes = sub.add_parser('themes', help='List built-in themes')
    themes.set_defaults(func=cmd_themes)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging()
    return int(args.func(args))


if __name__ == '__main__':
    raise SystemExit(main())
