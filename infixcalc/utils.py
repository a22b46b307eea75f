import enum


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def collapse_double_minus(code: str) -> str:
    """Rewrite every "--" into "+", scanning left to right without overlaps

    Cosmetic host-side normalization, the pipeline itself never applies it
    """
    return code.replace("--", "+")
