"""
Pytest configuration and shared fixtures.

Django itself is configured by pytest-django from the settings module named
here and in pyproject.toml; the fixtures below build the catalogue rows and
characters most tests start from.
"""

import os
import sys
from pathlib import Path

import pytest
from rest_framework.test import APIClient

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.append(str(PROJECT_ROOT))

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'bg3_api.settings')


@pytest.fixture
def client():
    """A standard API client. The API has no authentication."""
    return APIClient()


@pytest.fixture
def race(db):
    from api.models import Race
    return Race.objects.create(
        name="Elf",
        desc="Elves are a magical people of otherworldly grace.",
        playable=True,
        speed=30,
        darkvision=True,
        size="MEDIUM",
    )


@pytest.fixture
def fighter(db):
    """The Fighter class with its Champion subclass."""
    from api.models import CharacterClass, Subclass
    character_class = CharacterClass.objects.create(
        name="Fighter",
        desc="A master of martial combat.",
        hit_die=10,
        primary_ability="STRENGTH",
        saving_throws=["STRENGTH", "CONSTITUTION"],
    )
    Subclass.objects.create(name="Champion", desc="Physical improvement.", character_class=character_class)
    return character_class


@pytest.fixture
def wizard(db):
    from api.models import CharacterClass, Subclass
    character_class = CharacterClass.objects.create(
        name="Wizard",
        desc="A scholarly magic-user.",
        hit_die=6,
        primary_ability="INTELLIGENCE",
        saving_throws=["INTELLIGENCE", "WISDOM"],
        spellcasting=True,
    )
    Subclass.objects.create(name="School of Evocation", desc="Elemental effects.",
                            character_class=character_class)
    return character_class


@pytest.fixture
def fireball(db):
    from api.models import Spell
    return Spell.objects.create(
        name="Fireball",
        desc="An explosion of flame.",
        level=3,
        school="EVOCATION",
        casting_time="1 action",
        range="150 feet",
        components=["V", "S", "M"],
        duration="Instantaneous",
    )


@pytest.fixture
def make_character(race, fighter):
    """
    Factory creating a character with its inventory and equipment, the way
    the API does.
    """
    from api.models import Character, Equipment, Inventory

    def _make(name="Lae'zel", **fields):
        fields.setdefault('race', race)
        fields.setdefault('character_class', fighter)
        character = Character.objects.create(name=name, **fields)
        Inventory.objects.create(character=character)
        Equipment.objects.create(character=character)
        return character

    return _make


@pytest.fixture
def character(make_character):
    return make_character()
