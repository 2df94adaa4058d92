import random

import pytest

from rsg.errors import RecursionLimitExceeded, UndefinedNonterminalError
from rsg.expander import expand
from rsg.grammar import Production, is_terminal

# Every recursive alternative is one of several, so each chain ends quickly.
NESTED_GRAMMAR = """{
<start>
2
<np> <vp> .
<np> <vp> and <np> <vp> .
}
{
<np>
2
the <noun>
a <adj> <noun>
}
{
<vp>
3
runs
sleeps
sees <np>
}
{
<noun>
3
cat
dog
robot
}
{
<adj>
3
small
green
very <adj>
}
"""

# No recursion at all, so depth stays at three.
FLAT_GRAMMAR = """{
<start>
2
<subject> <verb> .
<subject> <verb> <subject> .
}
{
<subject>
3
I
you
<pet>
}
{
<pet>
2
the cat
the dog
}
{
<verb>
2
wait
see
}
"""

CYCLE_GRAMMAR = """{
<loop>
1
again <loop>
}
"""


def test_terminals_copied_verbatim(animal_grammar, first_choice):
    assert expand(Production(("just", "words", "!")), animal_grammar, first_choice) == ["just", "words", "!"]


def test_expand_example(animal_grammar, first_choice, last_choice):
    start = animal_grammar.lookup("<start>").productions[0]
    assert expand(start, animal_grammar, first_choice) == ["The", "cat", "sat", "."]
    assert expand(start, animal_grammar, last_choice) == ["The", "dog", "sat", "."]


def test_empty_production_expands_to_nothing(animal_grammar, first_choice):
    assert expand(Production(), animal_grammar, first_choice) == []


@pytest.mark.parametrize("grammar_text", [FLAT_GRAMMAR, NESTED_GRAMMAR])
def test_output_contains_only_terminals(parse_text, grammar_text):
    grammar = parse_text(grammar_text)
    rng = random.Random(1234)
    for _ in range(200):
        text = expand(Production(("<start>",)), grammar, rng)
        assert text[-1] == "."
        assert all(is_terminal(token) for token in text)


def test_seeded_expansion_is_repeatable(parse_text):
    grammar = parse_text(NESTED_GRAMMAR)
    start = Production(("<start>",))
    first = [expand(start, grammar, random.Random(99)) for _ in range(5)]
    second = [expand(start, grammar, random.Random(99)) for _ in range(5)]
    assert first == second


def test_nested_undefined_nonterminal(parse_text, first_choice):
    grammar = parse_text("{\n<start>\n1\nThe <animal> sat .\n}\n")
    with pytest.raises(UndefinedNonterminalError) as info:
        expand(grammar.lookup("<start>").productions[0], grammar, first_choice)
    assert info.value.nonterminal == "<animal>"


def test_cycle_hits_depth_limit(parse_text, first_choice):
    grammar = parse_text(CYCLE_GRAMMAR)
    with pytest.raises(RecursionLimitExceeded) as info:
        expand(Production(("<loop>",)), grammar, first_choice, max_depth=50)
    assert info.value.nonterminal == "<loop>"
    assert info.value.limit == 50


def test_default_depth_limit_beats_interpreter_limit(parse_text, first_choice):
    grammar = parse_text(CYCLE_GRAMMAR)
    with pytest.raises(RecursionLimitExceeded):
        expand(Production(("<loop>",)), grammar, first_choice)


@pytest.mark.parametrize("max_depth", [5000, None])
def test_running_out_of_stack_is_reported_as_depth_limit(parse_text, first_choice, max_depth):
    grammar = parse_text(CYCLE_GRAMMAR)
    with pytest.raises(RecursionLimitExceeded) as info:
        expand(Production(("<loop>",)), grammar, first_choice, max_depth=max_depth)
    assert info.value.nonterminal == "<loop>"


def test_depth_limit_counts_nesting_not_total_tokens(animal_grammar, first_choice):
    production = Production(("<animal>",) * 20)
    assert expand(production, animal_grammar, first_choice, max_depth=1) == ["cat"] * 20
    with pytest.raises(RecursionLimitExceeded):
        expand(Production(("<start>",)), animal_grammar, first_choice, max_depth=1)


def test_alternatives_are_uniform(parse_text):
    grammar = parse_text("{\n<coin>\n2\nheads\ntails\n}\n")
    rng = random.Random(7)
    results = [expand(Production(("<coin>",)), grammar, rng)[0] for _ in range(2000)]
    assert 850 < results.count("heads") < 1150
