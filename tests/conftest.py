import io

import pytest

from rsg.grammar import parse_grammar

ANIMAL_GRAMMAR = """{
<start>
1
The <animal> sat .
}
{
<animal>
2
cat
dog
}
"""


class FixedChoice:
    """Random source that always takes the alternative at ``index``."""

    def __init__(self, index):
        self.index = index

    def choice(self, seq):
        return seq[self.index]


@pytest.fixture
def first_choice():
    return FixedChoice(0)


@pytest.fixture
def last_choice():
    return FixedChoice(-1)


@pytest.fixture
def parse_text():
    def parse(text, **kwargs):
        return parse_grammar(io.StringIO(text), **kwargs)

    return parse


@pytest.fixture
def animal_text():
    return ANIMAL_GRAMMAR


@pytest.fixture
def animal_grammar(parse_text, animal_text):
    return parse_text(animal_text)
