import logging
import sys

from processingformats.errors import ProcessingFormatsError
from processingformats.messages import parse_message
from processingformats.settings import parse_args


def read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as handle:
        return handle.read()


def validate_source(text: str, source: str, settings, logger: logging.Logger):
    """Parse and validate one message; returns the entity when it is valid."""
    try:
        entity = parse_message(text, settings.message_type)
    except ProcessingFormatsError as exc:
        logger.error("Unparseable message: source=%s error=%s", source, exc)
        return None

    errors = entity.get_errors()
    if errors:
        logger.warning(
            "Rejected %s: source=%s errors=%d",
            type(entity).__name__,
            source,
            len(errors),
        )
        for error in errors:
            logger.warning("  %s", error)
        return None

    logger.info("Accepted %s: source=%s", type(entity).__name__, source)
    return entity


def run(settings, logger: logging.Logger) -> dict:
    accepted = 0
    rejected = 0
    for path in settings.paths:
        source = "<stdin>" if path == "-" else path
        try:
            text = read_source(path)
        except (OSError, UnicodeDecodeError):
            logger.exception("Failed to read %s", source)
            rejected += 1
            continue

        entity = validate_source(text, source, settings, logger)
        if entity is None:
            rejected += 1
            continue
        accepted += 1
        if settings.echo:
            print(entity.to_json_string())

    logger.info("Validation complete: accepted=%d rejected=%d", accepted, rejected)
    return {"accepted": accepted, "rejected": rejected}


def main() -> int:
    settings = parse_args()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger = logging.getLogger("processingformats.main")
    logger.debug("Settings: %s", settings)

    metrics = run(settings, logger)
    return 1 if metrics["rejected"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
