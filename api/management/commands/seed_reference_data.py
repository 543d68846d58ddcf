"""
Loads the reference catalogue (races, classes with subclasses, spells,
weapons) into the database.

Rows are upserted by name, so the command can be run repeatedly. With
``--reset`` every character and catalogue row is deleted first.
"""

import logging

from django.core.management.base import BaseCommand
from django.db import transaction

from api.models import (Character, CharacterClass, CharacterSpell, Race, Spell,
                        Subclass, Weapon)

logger = logging.getLogger(__name__)

RACES = [
    {
        'name': 'Human',
        'desc': 'Humans are the most adaptable and ambitious people among the common races.',
        'playable': True,
        'speed': 30,
        'darkvision': False,
        'size': 'MEDIUM',
    },
    {
        'name': 'Elf',
        'desc': 'Elves are a magical people of otherworldly grace.',
        'playable': True,
        'speed': 30,
        'darkvision': True,
        'size': 'MEDIUM',
    },
]

CLASSES = [
    {
        'name': 'Fighter',
        'desc': 'A master of martial combat, skilled with a variety of weapons and armor.',
        'hit_die': 10,
        'primary_ability': 'STRENGTH',
        'saving_throws': ['STRENGTH', 'CONSTITUTION'],
        'spellcasting': False,
        'subclasses': [
            {'name': 'Champion', 'desc': 'A master of martial combat and physical improvement.'},
        ],
    },
    {
        'name': 'Wizard',
        'desc': 'A scholarly magic-user capable of manipulating the structures of reality.',
        'hit_die': 6,
        'primary_ability': 'INTELLIGENCE',
        'saving_throws': ['INTELLIGENCE', 'WISDOM'],
        'spellcasting': True,
        'subclasses': [
            {'name': 'School of Evocation',
             'desc': 'A specialist in spells that create powerful elemental effects.'},
        ],
    },
]

SPELLS = [
    {
        'name': 'Fireball',
        'desc': 'A bright streak flashes from your pointing finger to a point you choose within range '
                'and then blossoms with a low roar into an explosion of flame.',
        'level': 3,
        'school': 'EVOCATION',
        'casting_time': '1 action',
        'range': '150 feet',
        'components': ['V', 'S', 'M'],
        'duration': 'Instantaneous',
        'concentration': False,
    },
]

WEAPONS = [
    {
        'name': 'Longsword',
        'desc': 'A versatile blade favored by knights and warriors.',
        'type': 'LONGSWORD',
        'damage': '1d8',
        'two_handed': False,
        'versatile': True,
        'architype': 'MARTIAL',
    },
]


class Command(BaseCommand):
    help = "Seeds the reference races, classes, subclasses, spells and weapons."

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset',
            action='store_true',
            help="Delete all characters and catalogue rows before seeding.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        try:
            if options['reset']:
                self._reset()

            for model, rows in ((Race, RACES), (Spell, SPELLS), (Weapon, WEAPONS)):
                for row in rows:
                    self._upsert(model, row)

            for row in CLASSES:
                row = dict(row)
                subclasses = row.pop('subclasses')
                character_class = self._upsert(CharacterClass, row)
                for subclass in subclasses:
                    Subclass.objects.update_or_create(
                        character_class=character_class,
                        name=subclass['name'],
                        defaults={'desc': subclass['desc']},
                    )
        except Exception:
            logger.error("SEED: Failed to load reference data.", exc_info=True)
            raise

        self.stdout.write(self.style.SUCCESS("Seed data created successfully"))

    @staticmethod
    def _upsert(model, row):
        values = dict(row)
        name = values.pop('name')
        instance, created = model.objects.update_or_create(name=name, defaults=values)
        logger.info("SEED: %s %s '%s'.", 'Created' if created else 'Updated', model._meta.verbose_name, name)
        return instance

    @staticmethod
    def _reset():
        deleted = 0
        for model in (CharacterSpell, Character, CharacterClass, Race, Spell, Weapon):
            count, _ = model.objects.all().delete()
            deleted += count
        logger.info("SEED: Deleted %d existing rows.", deleted)
