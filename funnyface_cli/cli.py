"""
Funny Face CLI - Main entry point.

Renders clown features or a debug rectangle onto an image file, from face
observations exported by a landmark detector.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from funnyface_overlay import (
    FaceObservation,
    FaceOverlayRenderer,
    FeatureFlags,
    NormalizedRect,
    OverlayConfig,
    load_image,
    observations_from_dict,
    save_image,
)
from funnyface_overlay.logging import LogEvent, StructuredLogger, create_logger


def load_observations(path: str, logger: StructuredLogger) -> List[FaceObservation]:
    """
    Load face observations from a detector output JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the JSON is invalid or malformed
    """
    try:
        json_path = Path(path)
        if not json_path.exists():
            raise FileNotFoundError(f"Observations file not found: {path}")

        try:
            with open(json_path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}")

        observations = observations_from_dict(data)
    except (FileNotFoundError, ValueError) as e:
        logger.error(
            event=LogEvent.OBSERVATIONS_ERROR,
            message="Failed to load face observations",
            metadata={'path': path},
            exc_info=e,
        )
        raise

    logger.info(
        event=LogEvent.OBSERVATIONS_LOADED,
        message="Loaded face observations",
        metadata={'path': path, 'count': len(observations)},
    )
    return observations


def load_config(path: Optional[str], logger: StructuredLogger) -> OverlayConfig:
    """
    Load overlay config from YAML, or defaults when no path is given.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the YAML is invalid or fails validation
    """
    if path is None:
        return OverlayConfig()

    try:
        config = OverlayConfig.from_yaml(Path(path))
    except (FileNotFoundError, ValueError) as e:
        logger.error(
            event=LogEvent.CONFIG_ERROR,
            message="Failed to load overlay config",
            metadata={'path': path},
            exc_info=e,
        )
        raise

    logger.info(
        event=LogEvent.CONFIG_LOADED,
        message="Loaded overlay config",
        metadata={'path': path, 'features': config.features.to_dict()},
    )
    return config


def resolve_features(config: OverlayConfig, args: argparse.Namespace) -> FeatureFlags:
    """Config feature defaults, minus anything switched off on the command line."""
    return FeatureFlags(
        eyes=config.features.eyes and not args.no_eyes,
        nose=config.features.nose and not args.no_nose,
        mouth=config.features.mouth and not args.no_mouth,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="funnyface-cli",
        description="Funny Face CLI - Burn clown features into images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Clown eyes, nose and mouth for every detected face
  funnyface-cli face selfie.jpg faces.json -o clown.png

  # Skip the mouth, use a custom style
  funnyface-cli --config config/overlay.yaml face selfie.jpg faces.json -o clown.png --no-mouth

  # Draw a debug rectangle (normalized x y width height, origin bottom-left)
  funnyface-cli debug-rect selfie.jpg -o debug.png --rect 0.25 0.25 0.5 0.5
"""
    )

    # Global arguments
    parser.add_argument(
        "--config",
        default=None,
        help="Overlay config YAML (default: built-in style)"
    )
    parser.add_argument(
        "--bake-orientation",
        action="store_true",
        help="Write upright pixels instead of an EXIF orientation tag"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the config log level"
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    face = subparsers.add_parser('face', help='Draw clown features from observations')
    face.add_argument('image', help='Source image path')
    face.add_argument('observations', help='Detector output JSON')
    face.add_argument('-o', '--output', required=True, help='Output image path')
    face.add_argument('--no-eyes', action='store_true', help='Do not draw eyes')
    face.add_argument('--no-nose', action='store_true', help='Do not draw the nose')
    face.add_argument('--no-mouth', action='store_true', help='Do not draw the mouth')

    debug = subparsers.add_parser('debug-rect', help='Draw a normalized debug rectangle')
    debug.add_argument('image', help='Source image path')
    debug.add_argument('-o', '--output', required=True, help='Output image path')
    debug.add_argument(
        '--rect',
        nargs=4,
        type=float,
        metavar=('X', 'Y', 'W', 'H'),
        default=None,
        help='Image-normalized rectangle; omit to copy the image unchanged'
    )

    return parser


def run(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Execute a parsed command.

    Returns:
        Summary of what was written

    Raises:
        FileNotFoundError, ValueError, FunnyFaceError: On bad input
        RuntimeError: If the renderer produced no result
    """
    # Command-line level (or INFO) until the config is loaded
    logger = create_logger("cli", level=getattr(logging, args.log_level or "INFO"))
    config = load_config(args.config, logger)
    level = getattr(logging, args.log_level or config.log_level)
    logger.set_level(level)

    renderer = FaceOverlayRenderer(style=config.style, logger=create_logger("renderer", level=level))
    io_logger = create_logger("io", level=level)
    image = load_image(args.image, logger=io_logger)

    if args.command == 'face':
        observations = load_observations(args.observations, logger)
        features = resolve_features(config, args)
        result = renderer.render_funny_face(image, observations, features)
    else:
        rect = NormalizedRect(*args.rect) if args.rect is not None else None
        result = renderer.render_debug_rect(image, rect)

    if result is None:
        raise RuntimeError(f"Rendering produced no result for {args.image}")

    bake = args.bake_orientation or config.bake_orientation
    output = save_image(result, args.output, bake_orientation=bake, logger=io_logger)
    return {
        'command': args.command,
        'output': str(output),
        'orientation': result.orientation.value,
        'baked': bake,
    }


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        summary = run(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(summary))
    return 0


if __name__ == '__main__':
    sys.exit(main())
