#!/usr/bin/env python3
"""Lay out a graph payload and write it as SVG or scene JSON."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from blueprint.config import ConfigError, load_config
from blueprint.contracts import GraphPayloadError, parse_graph_payload
from blueprint.export.svg import render_scene_svg
from blueprint.ui.service import GraphSceneService

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments for the renderer.

    Returns:
        argparse.Namespace: Parsed command line arguments.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("input", type=Path, help="JSON file with 'nodes' and 'edges' arrays")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Destination file (default: stdout)",
    )
    parser.add_argument(
        "--format",
        choices=("svg", "json"),
        default="svg",
        help="Output format (default: svg)",
    )
    parser.add_argument("--width", type=float, default=None, help="Viewport width in pixels")
    parser.add_argument("--height", type=float, default=None, help="Viewport height in pixels")
    parser.add_argument("--config", type=Path, default=None, help="Alternate config.yaml")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the CLI renderer.

    Returns:
        int: Exit status code where ``0`` indicates success.
    """
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"Unable to load configuration: {exc}", file=sys.stderr)
        return 1

    try:
        payload = parse_graph_payload(args.input.read_bytes())
    except OSError as exc:
        print(f"Unable to read {args.input}: {exc.strerror}", file=sys.stderr)
        return 1
    except GraphPayloadError as exc:
        print(f"Invalid graph payload in {args.input}: {exc}", file=sys.stderr)
        return 1

    service = GraphSceneService.from_config(config)
    scene = service.build_scene(payload.nodes, payload.edges, width=args.width, height=args.height)
    if args.format == "json":
        rendered = json.dumps(scene.to_dict(), indent=2, ensure_ascii=False)
    else:
        rendered = render_scene_svg(scene, node_radius=config.ui.node_radius, title=args.input.stem)

    if args.output is None:
        sys.stdout.write(rendered + "\n")
    else:
        args.output.write_text(rendered, encoding="utf-8")
        LOGGER.info(
            "Wrote %s (nodes=%d, edges=%d) to %s",
            args.format,
            scene.node_count,
            scene.edge_count,
            args.output,
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
