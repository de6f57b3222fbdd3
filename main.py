# dalle - client for the image generation API
# Copyright (C) 2025 brokechubb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

import argparse
import os
import sys
import time

import requests

import config
from dalle.client import ImageClient
from dalle.exceptions import DalleError
from dalle.models import ImageSize, ResponseFormat
from utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_API_ERROR = 1
EXIT_USAGE = 2
EXIT_TRANSPORT_ERROR = 3


def build_parser():
    """Build the command line parser"""
    parser = argparse.ArgumentParser(prog="dalle", description="Generate, edit and vary images")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--size", type=int, choices=[size.value for size in ImageSize], help="Side length in pixels")
    common.add_argument("-n", "--count", type=int, help="Number of images to request")
    common.add_argument("--user", help="End-user identifier forwarded to the API")
    common.add_argument("--format", dest="response_format", choices=[fmt.value for fmt in ResponseFormat], help="Response format")
    common.add_argument("--out", help="Directory to write base64 results to")

    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", parents=[common], help="Generate images from a prompt")
    generate.add_argument("prompt")

    edit = sub.add_parser("edit", parents=[common], help="Edit an image with a mask")
    edit.add_argument("prompt")
    edit.add_argument("--image", required=True, help="Path to the PNG to edit")
    edit.add_argument("--mask", required=True, help="Path to the PNG mask")

    variation = sub.add_parser("variation", parents=[common], help="Create variations of an image")
    variation.add_argument("--image", required=True, help="Path to the source PNG")

    return parser


def run_command(client, args):
    """Dispatch the parsed command; files opened here are closed here"""
    options = {
        "size": args.size,
        "n": args.count,
        "user": args.user,
        "response_format": args.response_format,
    }

    if args.command == "generate":
        return client.generate(args.prompt, **options)

    if args.command == "edit":
        with open(args.image, "rb") as image, open(args.mask, "rb") as mask:
            return client.edit(args.prompt, image, mask, **options)

    with open(args.image, "rb") as image:
        return client.variation(image, **options)


def write_results(results, out_dir=None):
    """Return one output line per result, saving base64 payloads when asked"""
    lines = []
    stamp = int(time.time())
    for index, result in enumerate(results):
        if out_dir and result.b64_json is not None:
            payload = result.decode_image()
            os.makedirs(out_dir, exist_ok=True)
            path = os.path.join(out_dir, f"image_{stamp}_{index}.png")
            with open(path, "wb") as f:
                f.write(payload)
            lines.append(path)
        elif result.url:
            lines.append(result.url)
        elif result.b64_json:
            lines.append(result.b64_json)
    return lines


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(config.LOG_LEVEL, log_to_file=config.LOG_TO_FILE, log_file_path=config.LOG_FILE_PATH)

    if not config.DALLE_API_KEY:
        logger.error("DALLE_API_KEY is not set")
        return EXIT_USAGE

    try:
        with ImageClient(config.DALLE_API_KEY) as client:
            results = run_command(client, args)
    except DalleError as e:
        logger.error(f"❌ {type(e).__name__}: {e}")
        return EXIT_API_ERROR
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Transport error: {e}")
        return EXIT_TRANSPORT_ERROR
    except OSError as e:
        logger.error(f"Could not open input file: {e}")
        return EXIT_USAGE

    try:
        lines = write_results(results, args.out)
    except DalleError as e:
        logger.error(f"❌ {type(e).__name__}: {e}")
        return EXIT_API_ERROR

    for line in lines:
        print(line)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
