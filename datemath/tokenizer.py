import logging

import regex as re

from .errors import ParseError
from .operations import UNIT_CHARS, Operation

logger = logging.getLogger(__name__)

ROUND_PATTERN = re.compile(r"/[%s]" % UNIT_CHARS)
OPERATION_PATTERN = re.compile(r"[+\-][0-9]+[%s]" % UNIT_CHARS)


def split_tokens(suffix, expression=None):
    """Split the text following ``now`` into raw operation tokens.

    A round token is only recognized as the last two characters of the
    suffix. What remains must be covered exactly by arithmetic tokens.

    :param suffix:
        The expression with its leading ``now`` removed, e.g. ``"-1d+2h/d"``.
    :type suffix: str

    :param expression:
        The full expression, attached to any ParseError. Defaults to
        ``"now" + suffix``.
    :type expression: str

    :return: A list of raw tokens such as ``["-1d", "+2h", "/d"]``.

    :raises: ParseError
    """
    if expression is None:
        expression = "now" + suffix

    round_token = None
    if ROUND_PATTERN.fullmatch(suffix[-2:]):
        round_token = suffix[-2:]
        suffix = suffix[:-2]

    tokens = OPERATION_PATTERN.findall(suffix)
    if sum(len(token) for token in tokens) != len(suffix):
        raise ParseError(expression)

    if round_token:
        tokens.append(round_token)

    if not tokens:
        raise ParseError(expression)

    logger.debug(f"Tokenized {expression!r} into {tokens}")
    return tokens


def tokenize(suffix, expression=None):
    """Tokenize ``suffix`` into an ordered list of :class:`Operation`."""
    return [Operation.from_token(token) for token in split_tokens(suffix, expression)]
