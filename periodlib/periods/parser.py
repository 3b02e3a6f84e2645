"""
Period expression grammar.

Turns text such as "monthly from 2020 to 2021/06", "every 2 weeks",
"last quarter" or "every monday" into a date range and/or a step duration.

Recognised phrases:

    <date literal>                   2020, 2021/06, 2021-06-15, 06/15
    <month> [<year>]                 jun, june 2020
    <weekday>                        the latest such day up to today
    N                                a year when N > 31, else a day of month
    today | tomorrow | yesterday
    N <unit>s ago | N <unit>s hence
    this | next | last  year | quarter | month | week | day
    this | next | last  <month> | <weekday>
    in <term>
    from <term> | since <term>       range begin
    to <term>                        range end, end period included
    until <term>                     range end, end period excluded
    <term> - <term>                  range, end period included
    <term>-<term>                    same, when the joined word is no date
    every N <unit>s | every <unit>
    every <weekday>                  weekly, anchored on that weekday
    daily | weekly | biweekly | monthly | bimonthly | quarterly | yearly

``every <weekday>`` combines with any bound ("every monday in 2021",
"every friday until 2021/08/01"); the slices then start on that weekday.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

from periodlib.conventions.config import DEFAULT_CONFIG, TimesConfig
from periodlib.conventions.types import Quantum
from periodlib.dates.adjustments import latest_weekday, nearest_boundary, shift
from periodlib.dates.literals import parse_date_with_traits
from periodlib.dates.names import month_from_name, weekday_from_name
from periodlib.errors import LiteralDateError, ParseError
from periodlib.periods.duration import Duration
from periodlib.periods.specifier import Range, Specifier, SpecifierOrRange

logger = logging.getLogger(__name__)

_WORD = re.compile(r"\S+")


class TokenKind(Enum):
    DATE = "DATE"
    INT = "INT"
    DASH = "DASH"
    A_MONTH = "A_MONTH"
    A_WDAY = "A_WDAY"
    AGO = "AGO"
    HENCE = "HENCE"
    SINCE = "SINCE"
    UNTIL = "UNTIL"
    TO = "TO"
    IN = "IN"
    THIS = "THIS"
    NEXT = "NEXT"
    LAST = "LAST"
    EVERY = "EVERY"
    TODAY = "TODAY"
    TOMORROW = "TOMORROW"
    YESTERDAY = "YESTERDAY"
    UNIT = "UNIT"
    RECURRENCE = "RECURRENCE"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int
    value: Any = None

    def unexpected(self) -> ParseError:
        return ParseError(
            f"Unexpected token '{self.text}' at position {self.position}",
            token=self.text,
            position=self.position,
        )


_KEYWORDS = {
    "ago": TokenKind.AGO,
    "hence": TokenKind.HENCE,
    "since": TokenKind.SINCE,
    "from": TokenKind.SINCE,
    "until": TokenKind.UNTIL,
    "to": TokenKind.TO,
    "in": TokenKind.IN,
    "this": TokenKind.THIS,
    "next": TokenKind.NEXT,
    "last": TokenKind.LAST,
    "every": TokenKind.EVERY,
    "today": TokenKind.TODAY,
    "tomorrow": TokenKind.TOMORROW,
    "yesterday": TokenKind.YESTERDAY,
}

_UNITS = {
    "day": Quantum.DAY,
    "days": Quantum.DAY,
    "week": Quantum.WEEK,
    "weeks": Quantum.WEEK,
    "month": Quantum.MONTH,
    "months": Quantum.MONTH,
    "quarter": Quantum.QUARTER,
    "quarters": Quantum.QUARTER,
    "year": Quantum.YEAR,
    "years": Quantum.YEAR,
}

_RECURRENCES = {
    "daily": Duration(Quantum.DAY, 1),
    "weekly": Duration(Quantum.WEEK, 1),
    "biweekly": Duration(Quantum.WEEK, 2),
    "monthly": Duration(Quantum.MONTH, 1),
    "bimonthly": Duration(Quantum.MONTH, 2),
    "quarterly": Duration(Quantum.QUARTER, 1),
    "yearly": Duration(Quantum.YEAR, 1),
}


def _classify(word: str, position: int, today: date, config: TimesConfig) -> Token:
    lowered = word.lower()
    if word == "-":
        return Token(TokenKind.DASH, word, position)
    if lowered in _KEYWORDS:
        return Token(_KEYWORDS[lowered], word, position)
    if lowered in _UNITS:
        return Token(TokenKind.UNIT, word, position, _UNITS[lowered])
    if lowered in _RECURRENCES:
        return Token(TokenKind.RECURRENCE, word, position, _RECURRENCES[lowered])

    if word.isdigit() and len(word) not in (4, 8):
        return Token(TokenKind.INT, word, position, int(word))
    if any(ch.isdigit() for ch in word):
        try:
            when, traits = parse_date_with_traits(word, today.year, config)
        except LiteralDateError as exc:
            raise ParseError(
                f"Unexpected token '{word}' at position {position}",
                token=word,
                position=position,
            ) from exc
        return Token(TokenKind.DATE, word, position, Specifier.from_date(when, traits))

    month = month_from_name(lowered)
    if month is not None:
        return Token(TokenKind.A_MONTH, word, position, month)
    wday = weekday_from_name(lowered)
    if wday is not None:
        return Token(TokenKind.A_WDAY, word, position, wday)

    raise ParseError(
        f"Unexpected token '{word}' at position {position}",
        token=word,
        position=position,
    )


def tokenize(
    text: str, config: Optional[TimesConfig] = None, today: Optional[date] = None
) -> List[Token]:
    """Split a period expression into classified tokens."""
    config = config or DEFAULT_CONFIG
    today = today or config.today()
    tokens = []
    for match in _WORD.finditer(text):
        word, position = match.group(0), match.start()
        try:
            tokens.append(_classify(word, position, today, config))
            continue
        except ParseError:
            left, dash, right = word.partition("-")
            if not (dash and left and right):
                raise
        # "2020-2021", "jun-aug": a dash joining two terms
        tokens.append(_classify(left, position, today, config))
        tokens.append(Token(TokenKind.DASH, dash, position + len(left)))
        tokens.append(_classify(right, position + len(left) + 1, today, config))
    return tokens


def period_tokens(
    text: str, config: Optional[TimesConfig] = None, today: Optional[date] = None
) -> str:
    """Render the token stream of ``text``, one token per line."""
    lines = []
    for token in tokenize(text, config, today):
        line = f"{token.position:>3}: {token.kind.value} '{token.text}'"
        if token.value is not None:
            line += f" -> {token.value}"
        lines.append(line)
    lines.append("END_REACHED")
    return "\n".join(lines)


# A parsed term is either a single specifier or a pair of exclusive bounds
Term = Union[Specifier, Range]


class PeriodParser:
    """Recursive-descent parser over a token list."""

    def __init__(
        self,
        text: str,
        config: Optional[TimesConfig] = None,
        today: Optional[date] = None,
    ):
        self.text = text
        self.config = config or DEFAULT_CONFIG
        self.today = today or self.config.today()
        self.tokens = tokenize(text, self.config, self.today)
        self._index = 0
        # Weekday set by "every <weekday>", filled in by parse()
        self.anchor: Optional[int] = None

    # Token stream
    def _peek(self) -> Optional[Token]:
        if self._index < len(self.tokens):
            return self.tokens[self._index]
        return None

    def _next(self) -> Token:
        token = self._peek()
        if token is None:
            raise ParseError(
                f"Unexpected end of period expression: '{self.text}'",
                position=len(self.text),
            )
        self._index += 1
        return token

    # Terms
    def _period_of(self, when: date, unit: Quantum) -> Term:
        """The whole ``unit`` period containing ``when``."""
        if unit is Quantum.YEAR:
            return Specifier(year=when.year)
        if unit is Quantum.MONTH:
            return Specifier(year=when.year, month=when.month)
        if unit is Quantum.DAY:
            return Specifier.from_date(when)
        base = nearest_boundary(when, unit, self.config.start_of_week)
        return Range(Specifier.from_date(base), Specifier.from_date(shift(base, unit, 1)))

    def _relative(self, adjust: int) -> Term:
        token = self._next()
        if token.kind is TokenKind.UNIT:
            return self._period_of(shift(self.today, token.value, adjust), token.value)
        if token.kind is TokenKind.A_MONTH:
            return Specifier(year=self.today.year + adjust, month=token.value)
        if token.kind is TokenKind.A_WDAY:
            base = nearest_boundary(self.today, Quantum.WEEK, self.config.start_of_week)
            when = base + timedelta(days=(token.value - base.weekday()) % 7)
            return Specifier.from_date(when + timedelta(weeks=adjust))
        raise token.unexpected()

    def _amount(self, token: Token) -> Term:
        amount = token.value
        following = self._peek()
        if following is None or following.kind is not TokenKind.UNIT:
            if amount > 31:
                return Specifier(year=amount)
            return Specifier(day=amount)

        unit = self._next().value
        direction = self._next()
        if direction.kind is TokenKind.AGO:
            amount = -amount
        elif direction.kind is not TokenKind.HENCE:
            raise direction.unexpected()
        return self._period_of(shift(self.today, unit, amount), unit)

    def _term(self, token: Optional[Token] = None) -> Term:
        token = token or self._next()
        kind = token.kind
        if kind is TokenKind.DATE:
            return token.value
        if kind is TokenKind.INT:
            return self._amount(token)
        if kind is TokenKind.A_MONTH:
            year = None
            following = self._peek()
            if (
                following is not None
                and following.kind is TokenKind.DATE
                and following.value == Specifier(year=following.value.year)
            ):
                year = self._next().value.year
            return Specifier(year=year, month=token.value)
        if kind is TokenKind.A_WDAY:
            return Specifier.from_date(latest_weekday(self.today, token.value))
        if kind is TokenKind.TODAY:
            return Specifier.from_date(self.today)
        if kind is TokenKind.TOMORROW:
            return Specifier.from_date(self.today + timedelta(days=1))
        if kind is TokenKind.YESTERDAY:
            return Specifier.from_date(self.today - timedelta(days=1))
        if kind is TokenKind.THIS:
            return self._relative(0)
        if kind is TokenKind.NEXT:
            return self._relative(1)
        if kind is TokenKind.LAST:
            return self._relative(-1)
        raise token.unexpected()

    def _every(self) -> Tuple[Duration, Optional[Specifier]]:
        token = self._next()
        if token.kind is TokenKind.INT:
            unit = self._next()
            if unit.kind is not TokenKind.UNIT:
                raise unit.unexpected()
            return Duration(unit.value, token.value), None
        if token.kind is TokenKind.UNIT:
            return Duration(token.value, 1), None
        if token.kind is TokenKind.A_WDAY:
            return Duration(Quantum.WEEK, 1), Specifier(weekday=token.value)
        raise token.unexpected()

    # Expression
    def parse(self) -> Tuple[Optional[SpecifierOrRange], Optional[Duration]]:
        """Return the (range, duration) described by the text."""
        since: Optional[Specifier] = None
        until: Optional[Specifier] = None
        inclusion: Optional[Specifier] = None
        end_inclusive = False
        duration: Optional[Duration] = None
        anchor: Optional[Specifier] = None

        while self._peek() is not None:
            token = self._next()
            kind = token.kind

            if kind is TokenKind.RECURRENCE:
                duration = token.value
            elif kind is TokenKind.EVERY:
                duration, anchor = self._every()
            elif kind is TokenKind.SINCE:
                term = self._term()
                since = term.begin_spec if isinstance(term, Range) else term
            elif kind is TokenKind.UNTIL:
                term = self._term()
                until = term.begin_spec if isinstance(term, Range) else term
                end_inclusive = False
            elif kind is TokenKind.TO:
                term = self._term()
                if isinstance(term, Range):
                    until, end_inclusive = term.end_spec, False
                else:
                    until, end_inclusive = term, True
            elif kind is TokenKind.DASH:
                if inclusion is None:
                    raise token.unexpected()
                term = self._term()
                since, inclusion = inclusion, None
                if isinstance(term, Range):
                    until, end_inclusive = term.end_spec, False
                else:
                    until, end_inclusive = term, True
            else:
                if kind is TokenKind.IN:
                    token = self._next()
                term = self._term(token)
                if isinstance(term, Range):
                    since, until, end_inclusive = term.begin_spec, term.end_spec, False
                elif inclusion is None:
                    inclusion = term
                else:
                    raise token.unexpected()

        if duration is None and inclusion is not None:
            duration = inclusion.implied_duration()

        self.anchor = anchor.weekday if anchor is not None else None
        if anchor is not None and since is None and until is None and inclusion is None:
            inclusion = anchor

        period_range: Optional[SpecifierOrRange] = None
        if since is not None or until is not None:
            period_range = SpecifierOrRange(Range(since, until, end_inclusive))
        elif inclusion is not None:
            period_range = SpecifierOrRange(inclusion)

        logger.debug(
            "Parsed period %r: range=%s duration=%s anchor=%s",
            self.text,
            period_range.describe() if period_range else None,
            duration,
            self.anchor,
        )
        return period_range, duration


def parse_period(
    text: str, config: Optional[TimesConfig] = None, today: Optional[date] = None
) -> Tuple[Optional[SpecifierOrRange], Optional[Duration]]:
    """Parse a period expression into its (range, duration) parts."""
    return PeriodParser(text, config, today).parse()
