"""Entry point to the AnyCoder code generation service.

This source file contains entry point to the service. It is implemented in the
main() function. Besides starting the REST API service it is able to dump the
configuration or to generate code for one prompt directly from command line.
"""

import asyncio
import logging
import os
from argparse import ArgumentParser, Namespace
from typing import Optional

import aiohttp
from pydantic import ValidationError
from rich.logging import RichHandler

import constants
from configuration import configuration
from generation.errors import AuthError, RequestError
from generation.generator import create_code_generator
from log import get_logger
from models.requests import GenerationRequest
from models.responses import GenerationResult
from runners.uvicorn import start_uvicorn

FORMAT = "%(message)s"
logging.basicConfig(
    level="INFO", format=FORMAT, datefmt="[%X]", handlers=[RichHandler()]
)

logger = get_logger(__name__)


def create_argument_parser() -> ArgumentParser:
    """Create and configure argument parser object."""
    parser = ArgumentParser()
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        help="make it verbose",
        action="store_true",
        default=False,
    )
    parser.add_argument(
        "-d",
        "--dump-configuration",
        dest="dump_configuration",
        help="dump actual configuration into JSON file and quit",
        action="store_true",
        default=False,
    )
    parser.add_argument(
        "-c",
        "--config",
        dest="config_file",
        help="path to configuration file (default: anycoder.yaml)",
        default="anycoder.yaml",
    )
    parser.add_argument(
        "-p",
        "--prompt",
        dest="prompt",
        help="generate code for given prompt, print it and quit",
        default=None,
    )
    parser.add_argument(
        "-l",
        "--language",
        dest="language",
        help=f"target language (default: {constants.DEFAULT_LANGUAGE})",
        default=constants.DEFAULT_LANGUAGE,
    )
    parser.add_argument(
        "-m",
        "--model",
        dest="model_id",
        help=f"model to be used (default: {constants.DEFAULT_MODEL_ID})",
        default=constants.DEFAULT_MODEL_ID,
    )
    parser.add_argument(
        "-r",
        "--reference-file",
        dest="reference_file",
        help="file with reference content",
        default=None,
    )
    parser.add_argument(
        "-u",
        "--url",
        dest="website_url",
        help="website to redesign",
        default=None,
    )
    parser.add_argument(
        "-w",
        "--web-search",
        dest="web_search",
        help="enhance the prompt with web search results",
        action="store_true",
        default=False,
    )

    return parser


def read_reference_file(filename: Optional[str]) -> Optional[str]:
    """Read reference file, None when it is not a text file."""
    if filename is None:
        return None
    try:
        with open(filename, encoding="utf-8") as fin:
            return fin.read()
    except UnicodeDecodeError as e:
        logger.warning("Reference file %s is not a text file: %s", filename, e)
        return None


def create_generation_request(args: Namespace) -> GenerationRequest:
    """Construct generation request from command line arguments."""
    return GenerationRequest(
        prompt=args.prompt,
        language=args.language,
        model_id=args.model_id,
        web_search=args.web_search,
        reference_content=read_reference_file(args.reference_file),
        website_url=args.website_url,
    )


async def generate_once(request: GenerationRequest) -> GenerationResult:
    """Generate code for one request using loaded configuration."""
    async with aiohttp.ClientSession() as session:
        generator = create_code_generator(
            configuration.configuration, session, configuration.history_store
        )
        return await generator.generate(request)


def main() -> None:
    """Entry point to the web service."""
    logger.info("AnyCoder startup")
    parser = create_argument_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    configuration.load_configuration(args.config_file)
    logger.info("Configuration loaded from %s", args.config_file)

    # -d or --dump-configuration CLI flags are used to dump the actual configuration
    # to a JSON file w/o doing any other operation
    if args.dump_configuration:
        try:
            configuration.configuration.dump()
            logger.info("Configuration dumped to configuration.json")
        except OSError as e:
            logger.error("Failed to dump configuration: %s", e)
            raise SystemExit(1) from e
        return

    # -p or --prompt CLI flags are used to generate code w/o starting the service
    if args.prompt is not None:
        try:
            request = create_generation_request(args)
            result = asyncio.run(generate_once(request))
        except ValidationError as e:
            logger.error("Invalid generation request: %s", e)
            raise SystemExit(2) from e
        except (AuthError, RequestError) as e:
            logger.error("Code generation failed: %s", e)
            raise SystemExit(1) from e
        if result.degraded:
            logger.warning("No provider available, offline response returned")
        print(result.code)
        return

    # Store config path in env so each uvicorn worker can load it
    # (step is needed because process context isn't shared).
    os.environ[constants.CONFIGURATION_PATH_ENV_VAR] = args.config_file

    # if every previous steps don't fail, start the service on specified port
    start_uvicorn(configuration.service_configuration)
    logger.info("AnyCoder finished")


if __name__ == "__main__":
    main()
