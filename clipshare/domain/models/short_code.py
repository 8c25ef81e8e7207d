# clipshare/domain/models/short_code.py

"""
Short code generation for clip access.

A short code is the public identifier of a clip. Generated codes are
10 characters long and drawn from an 8-symbol alphabet, which leaves
roughly 1.07e9 combinations: uniqueness is enforced by the store and
collisions are retried by the clip service.
"""

import secrets

ALPHABET = "abcd1234"
LENGTH = 10


class ShortCode(str):
    """
    Opaque, immutable clip identifier.

    Any string is accepted when parsing an external value (a path
    parameter, for instance); codes outside the generation alphabet
    simply won't be found in the store.
    """

    __slots__ = ()

    @classmethod
    def generate(cls) -> "ShortCode":
        """
        Generate a random short code using the `secrets` module.

        Returns:
            ShortCode: A code like "a3cd1b42dd"
        """
        return cls("".join(secrets.choice(ALPHABET) for _ in range(LENGTH)))

    @classmethod
    def parse(cls, raw: str) -> "ShortCode":
        return cls(raw)

    def as_str(self) -> str:
        return str.__str__(self)

    def __repr__(self) -> str:
        return f"ShortCode({str.__repr__(self)})"
