"""Helpers for assembling dice formula strings."""


def append_term(formula: str, term: str) -> str:
    """
    Append a free-text term to a formula as a signed term.

    A leading ``+`` or ``-`` on the term is kept; anything else is added.
    Blank terms leave the formula unchanged.

    Examples:
        >>> append_term("1d20", "2")
        '1d20 + 2'
        >>> append_term("1d20", "- @str.mod")
        '1d20 - @str.mod'
    """
    term = term.strip()
    if not term:
        return formula

    sign = "+"
    if term[0] in "+-":
        sign, term = term[0], term[1:].strip()
        if not term:
            return formula

    return f"{formula} {sign} {term}"


def append_number(formula: str, value: int) -> str:
    """
    Append a signed integer to a formula; zero leaves it unchanged.

    Examples:
        >>> append_number("1d20", -2)
        '1d20 - 2'
    """
    if value == 0:
        return formula
    sign = "+" if value > 0 else "-"
    return f"{formula} {sign} {abs(value)}"
