"""
Export the block catalog as the category definitions the editor host loads.

Usage:
    python -m catalog.export
    python -m catalog.export --board arduinoEsp32 --indent 2 --output blocks.json
"""

import argparse
import json
import sys

from boards import get_board
from protocol import SEPARATOR
from utilities.errors import BlockError
from utilities.logger import BlockLogger

from .manifest import get_catalog


def _argument_to_dict(arg_spec):
    entry = {"type": arg_spec.type, "defaultValue": arg_spec.default}
    if arg_spec.menu:
        entry["menu"] = arg_spec.menu
    if arg_spec.bounds:
        entry["min"], entry["max"] = arg_spec.bounds
    return entry


def _block_to_dict(descriptor):
    if descriptor == SEPARATOR:
        return SEPARATOR
    return {
        "opcode": descriptor.opcode,
        "blockType": descriptor.block_type,
        "text": descriptor.text,
        "arguments": {a.name: _argument_to_dict(a) for a in descriptor.arguments},
    }


def _menu_to_dict(menu):
    entry = {"items": [{"text": item.text, "value": item.value} for item in menu.items]}
    if menu.accept_reporters:
        entry["acceptReporters"] = True
    return entry


def catalog_to_dict(catalog):
    """Return the ordered list of category definitions for the editor host."""
    return [
        {
            "id": category.id,
            "name": category.name,
            "color1": category.colors[0],
            "color2": category.colors[1],
            "color3": category.colors[2],
            "blocks": [_block_to_dict(b) for b in category.blocks],
            "menus": {menu.name: _menu_to_dict(menu) for menu in category.menus},
        }
        for category in catalog.categories
    ]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Export the block catalog of a board as JSON.")
    parser.add_argument("--board", default="arduinoEsp32", help="Board variant id")
    parser.add_argument("--indent", type=int, default=None, help="Pretty-print with this indent")
    parser.add_argument("--output", "-o", default=None, help="Write to this file instead of stdout")
    args = parser.parse_args(argv)

    try:
        board = get_board(args.board)
    except BlockError as e:
        BlockLogger.error("CTLG", str(e))
        return 2

    payload = json.dumps(catalog_to_dict(get_catalog(board)), indent=args.indent)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(payload + "\n")
        BlockLogger.info("CTLG", f"Catalog for {board.device_id} written to {args.output}")
    else:
        sys.stdout.write(payload + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
