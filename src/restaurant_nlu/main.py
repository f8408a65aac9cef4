"""
Restaurant NLU Main Entry Point

Console entry point: trains the models or runs the interactive question loop.
"""
import argparse
import sys
from typing import Callable, List, Optional

from .config import get_config
from .core.pipeline import NLUPipeline
from .exceptions import NLUError
from .factory import PipelineFactory
from .logger import configure_logging_from_config, get_logger

logger = get_logger("restaurant_nlu.main")

PROMPT = "Enter your question: "
EXIT_COMMAND = "exit"


def run_repl(
    pipeline: NLUPipeline,
    input_func: Callable[[str], str] = input,
    output_func: Callable[[str], None] = print
) -> int:
    """
    Read questions one line at a time and print the responses

    An empty line, ``exit`` or end of input stops the loop.

    Returns:
        Number of processed questions
    """
    processed = 0
    while True:
        output_func("")
        try:
            line = input_func(PROMPT)
        except EOFError:
            break

        question = (line or "").strip()
        if not question or question.lower() == EXIT_COMMAND:
            break

        result = pipeline.process(question)
        output_func(result.text)
        processed += 1

    logger.debug(f"Interactive session ended after {processed} questions")
    return processed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="restaurant-nlu", description="Restaurant ordering assistant")
    parser.add_argument("--config", help="Path to the YAML configuration file")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    chat_parser = subparsers.add_parser("chat", help="Answer questions interactively (default)")
    chat_parser.add_argument("--retrain", action="store_true", help="Retrain instead of restoring persisted models")

    subparsers.add_parser("train", help="Train and persist the models, then print the metrics")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    try:
        config = get_config(args.config)
        configure_logging_from_config(config.logging)
        logger.info(f"Starting {config.service_name}...")

        pipeline = PipelineFactory.create_pipeline(config)

        if args.command == "train":
            metrics = pipeline.train()
            print(metrics.model_dump_json(indent=2))
            return 0

        pipeline.start(retrain=getattr(args, "retrain", False))
        run_repl(pipeline)
        return 0

    except NLUError as e:
        logger.error(f"Fatal error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.debug("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
