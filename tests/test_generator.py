"""Tests for the Ren'Py script generator."""

import copy

from renpy_transcoder.generator import generate
from renpy_transcoder.models import (
    Call,
    Character,
    Choice,
    Code,
    Condition,
    Dialogue,
    Hide,
    Jump,
    Label,
    Menu,
    Pause,
    Play,
    Return,
    Scene,
    Script,
    SetVariable,
    Show,
    Stop,
)


def test_character_block_then_blank_line():
    script = Script(
        characters=[
            Character(id="e", name="Eileen", color="#c8ffc8"),
            Character(id="l", name="Lucy"),
        ],
        elements=[Label(id="1", label="start")],
    )
    assert generate(script).split("\n") == [
        'define e = Character("Eileen", color="#c8ffc8")',
        'define l = Character("Lucy")',
        "",
        "label start:",
    ]


def test_no_blank_line_without_characters():
    script = Script(elements=[Label(id="1", label="start")])
    assert generate(script) == "label start:"


def test_empty_script():
    assert generate(Script()) == ""


def test_statements_indented_under_label():
    script = Script(
        elements=[
            Label(id="1", label="start"),
            Scene(id="2", image="bg room", transition="fade"),
            Show(id="3", image="eileen happy"),
            Show(id="4", image="eileen", position="left", transition="dissolve"),
            Hide(id="5", image="eileen"),
            Dialogue(id="6", character="e", content="Hello!"),
            Dialogue(id="7", content="Narration."),
            Play(id="8", channel="music", audio="theme.ogg"),
            Stop(id="9", channel="music"),
            SetVariable(id="10", variable="score", value="0"),
            Code(id="11", code="renpy.pause(2.0)"),
            Pause(id="12"),
            Pause(id="13", duration=1.5),
            Pause(id="14", duration=2.0),
            Call(id="15", label="helper"),
            Jump(id="16", label="ending"),
        ]
    )
    assert generate(script).split("\n") == [
        "label start:",
        "    scene bg room with fade",
        "    show eileen happy",
        "    show eileen at left with dissolve",
        "    hide eileen",
        '    e "Hello!"',
        '    "Narration."',
        '    play music "theme.ogg"',
        "    stop music",
        "    $ score = 0",
        "    $ renpy.pause(2.0)",
        "    pause",
        "    pause 1.5",
        "    pause 2",
        "    call helper",
        "    jump ending",
    ]


def test_return_resets_indent():
    script = Script(
        elements=[
            Label(id="1", label="start"),
            Return(id="2"),
            Scene(id="3", image="black"),
            Label(id="4", label="next"),
            Dialogue(id="5", content="Hi"),
        ]
    )
    assert generate(script).split("\n") == [
        "label start:",
        "    return",
        "scene black",
        "label next:",
        '    "Hi"',
    ]


def test_menu_keeps_only_dialogue_actions():
    script = Script(
        elements=[
            Label(id="1", label="start"),
            Menu(
                id="2",
                choices=[
                    Choice(
                        id="c1",
                        text="Yes",
                        actions=[
                            Dialogue(id="d1", content="Good."),
                            Jump(id="j1", label="end"),
                            Dialogue(id="d2", character="e", content="Great."),
                        ],
                    ),
                    Choice(id="c2", text="No", condition="brave"),
                ],
            ),
            Return(id="3"),
        ]
    )
    assert generate(script).split("\n") == [
        "label start:",
        "    menu:",
        '        "Yes":',
        '            "Good."',
        '            e "Great."',
        '        "No" if brave:',
        "    return",
    ]


def test_condition_has_no_text_form():
    script = Script(elements=[Label(id="1", label="start"), Condition(id="2", condition="x > 1")])
    assert generate(script) == "label start:"


def test_quotes_escaped():
    script = Script(elements=[Dialogue(id="1", character="e", content='Say "cheese"')])
    assert generate(script) == 'e "Say \\"cheese\\""'


def test_trailing_backslash_escaped():
    script = Script(elements=[Dialogue(id="1", content="C:\\")])
    assert generate(script) == '"C:\\\\"'


def test_backslash_before_letter_left_alone():
    script = Script(elements=[Dialogue(id="1", content="one\\ntwo")])
    assert generate(script) == '"one\\ntwo"'


def test_character_name_quotes_escaped():
    script = Script(characters=[Character(id="b", name='The "Boss"')])
    assert generate(script) == 'define b = Character("The \\"Boss\\"")\n'


def test_empty_assignment_has_no_trailing_space():
    script = Script(elements=[SetVariable(id="1", variable="x", value="")])
    assert generate(script) == "$ x ="


def test_generate_does_not_mutate_input():
    script = Script(
        characters=[Character(id="e", name="Eileen")],
        elements=[
            Label(id="1", label="start"),
            Menu(id="2", choices=[Choice(id="c", text="A", actions=[Jump(id="j", label="x")])]),
        ],
    )
    before = copy.deepcopy(script)
    generate(script)
    assert script == before
