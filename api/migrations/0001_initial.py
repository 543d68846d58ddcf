import re
import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Race',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(error_messages={'unique': 'A race with this name already exists.'},
                                          max_length=100, unique=True)),
                ('desc', models.TextField()),
                ('playable', models.BooleanField(default=True)),
                ('speed', models.PositiveSmallIntegerField(default=30, validators=[
                    django.core.validators.MinValueValidator(0, message='speed must be between 0 and 100'),
                    django.core.validators.MaxValueValidator(100, message='speed must be between 0 and 100'),
                ])),
                ('darkvision', models.BooleanField(default=False)),
                ('size', models.CharField(choices=[('TINY', 'Tiny'), ('SMALL', 'Small'), ('MEDIUM', 'Medium'),
                                                   ('LARGE', 'Large'), ('HUGE', 'Huge'),
                                                   ('GARGANTUAN', 'Gargantuan')],
                                          default='MEDIUM', max_length=12)),
            ],
            options={
                'verbose_name': 'race',
                'db_table': 'races',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='CharacterClass',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(error_messages={'unique': 'A class with this name already exists.'},
                                          max_length=100, unique=True)),
                ('desc', models.TextField()),
                ('hit_die', models.PositiveSmallIntegerField(choices=[(6, 'd6'), (8, 'd8'), (10, 'd10'),
                                                                      (12, 'd12')])),
                ('primary_ability', models.CharField(choices=[('STRENGTH', 'Strength'), ('DEXTERITY', 'Dexterity'),
                                                              ('CONSTITUTION', 'Constitution'),
                                                              ('INTELLIGENCE', 'Intelligence'),
                                                              ('WISDOM', 'Wisdom'), ('CHARISMA', 'Charisma')],
                                                     max_length=12)),
                ('saving_throws', models.JSONField(default=list)),
                ('spellcasting', models.BooleanField(default=False)),
            ],
            options={
                'verbose_name': 'class',
                'verbose_name_plural': 'classes',
                'db_table': 'classes',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Spell',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(error_messages={'unique': 'A spell with this name already exists.'},
                                          max_length=100, unique=True)),
                ('desc', models.TextField()),
                ('level', models.PositiveSmallIntegerField(default=0, validators=[
                    django.core.validators.MinValueValidator(0, message='Spell level must be between 0 and 9'),
                    django.core.validators.MaxValueValidator(9, message='Spell level must be between 0 and 9'),
                ])),
                ('school', models.CharField(choices=[('ABJURATION', 'Abjuration'), ('CONJURATION', 'Conjuration'),
                                                     ('DIVINATION', 'Divination'), ('ENCHANTMENT', 'Enchantment'),
                                                     ('EVOCATION', 'Evocation'), ('ILLUSION', 'Illusion'),
                                                     ('NECROMANCY', 'Necromancy'),
                                                     ('TRANSMUTATION', 'Transmutation')],
                                            max_length=16)),
                ('casting_time', models.CharField(max_length=100)),
                ('range', models.CharField(max_length=100)),
                ('components', models.JSONField(default=list)),
                ('duration', models.CharField(max_length=100)),
                ('concentration', models.BooleanField(default=False)),
            ],
            options={
                'verbose_name': 'spell',
                'db_table': 'spells',
                'ordering': ['level', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Weapon',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(error_messages={'unique': 'A weapon with this name already exists.'},
                                          max_length=100, unique=True)),
                ('desc', models.TextField()),
                ('type', models.CharField(choices=[
                    ('FLAIL', 'Flail'), ('MORNINGSTAR', 'Morningstar'), ('RAPIER', 'Rapier'),
                    ('SCHIMITAR', 'Scimitar'), ('SHORTSWORD', 'Shortsword'), ('WARPICK', 'War Pick'),
                    ('BATTLEAXE', 'Battleaxe'), ('LONGSWORD', 'Longsword'), ('TRIDENT', 'Trident'),
                    ('WARHAMMER', 'Warhammer'), ('GLAIVE', 'Glaive'), ('GREATAXE', 'Greataxe'),
                    ('GREATSWORD', 'Greatsword'), ('HALBERD', 'Halberd'), ('MAUL', 'Maul'), ('PIKE', 'Pike'),
                    ('HANDCROSSBOW', 'Hand Crossbow'), ('HEAVYCROSSBOW', 'Heavy Crossbow'),
                    ('LONGBOW', 'Longbow'), ('CLUB', 'Club'), ('DAGGER', 'Dagger'), ('HANDAXE', 'Handaxe'),
                    ('JAVELIN', 'Javelin'), ('LIGHTHAMMER', 'Light Hammer'), ('MACE', 'Mace'), ('NET', 'Net'),
                    ('SICKLE', 'Sickle'), ('SPEAR', 'Spear'), ('TRIPLE_SPEAR', 'Triple Spear'),
                    ('UNARMED_STRIKE', 'Unarmed Strike'),
                ], max_length=20)),
                ('damage', models.CharField(max_length=20, validators=[
                    django.core.validators.RegexValidator(
                        re.compile('^\\d+d\\d+$'),
                        code='invalid_damage',
                        message='Invalid damage format. Use format like "1d6" or "2d8"',
                    ),
                ])),
                ('two_handed', models.BooleanField(default=False)),
                ('versatile', models.BooleanField(default=False)),
                ('range', models.PositiveIntegerField(blank=True, null=True, validators=[
                    django.core.validators.MinValueValidator(1, message='Range must be a positive number'),
                ])),
                ('architype', models.CharField(choices=[('SIMPLE', 'Simple'), ('MARTIAL', 'Martial')],
                                               default='SIMPLE', max_length=8)),
            ],
            options={
                'verbose_name': 'weapon',
                'db_table': 'weapons',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Subclass',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=100)),
                ('desc', models.TextField()),
                ('character_class', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                                      related_name='subclasses', to='api.characterclass')),
            ],
            options={
                'verbose_name': 'subclass',
                'db_table': 'subclasses',
                'ordering': ['name'],
                'constraints': [
                    models.UniqueConstraint(fields=('character_class', 'name'), name='unique_subclass_per_class'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Character',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(error_messages={'unique': 'Character with this name already exists.'},
                                          max_length=100, unique=True)),
                ('level', models.PositiveSmallIntegerField(default=1, validators=[
                    django.core.validators.MinValueValidator(1, message='level must be between 1 and 20'),
                    django.core.validators.MaxValueValidator(20, message='level must be between 1 and 20'),
                ])),
                ('experience', models.PositiveIntegerField(default=0)),
                ('strength', models.PositiveSmallIntegerField(default=10, validators=[
                    django.core.validators.MinValueValidator(1, message='strength must be between 1 and 20'),
                    django.core.validators.MaxValueValidator(20, message='strength must be between 1 and 20'),
                ])),
                ('dexterity', models.PositiveSmallIntegerField(default=10, validators=[
                    django.core.validators.MinValueValidator(1, message='dexterity must be between 1 and 20'),
                    django.core.validators.MaxValueValidator(20, message='dexterity must be between 1 and 20'),
                ])),
                ('constitution', models.PositiveSmallIntegerField(default=10, validators=[
                    django.core.validators.MinValueValidator(1, message='constitution must be between 1 and 20'),
                    django.core.validators.MaxValueValidator(20, message='constitution must be between 1 and 20'),
                ])),
                ('intelligence', models.PositiveSmallIntegerField(default=10, validators=[
                    django.core.validators.MinValueValidator(1, message='intelligence must be between 1 and 20'),
                    django.core.validators.MaxValueValidator(20, message='intelligence must be between 1 and 20'),
                ])),
                ('wisdom', models.PositiveSmallIntegerField(default=10, validators=[
                    django.core.validators.MinValueValidator(1, message='wisdom must be between 1 and 20'),
                    django.core.validators.MaxValueValidator(20, message='wisdom must be between 1 and 20'),
                ])),
                ('charisma', models.PositiveSmallIntegerField(default=10, validators=[
                    django.core.validators.MinValueValidator(1, message='charisma must be between 1 and 20'),
                    django.core.validators.MaxValueValidator(20, message='charisma must be between 1 and 20'),
                ])),
                ('character_class', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT,
                                                      related_name='characters', to='api.characterclass')),
                ('race', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT,
                                           related_name='characters', to='api.race')),
                ('subclass', models.ForeignKey(blank=True, null=True,
                                               on_delete=django.db.models.deletion.SET_NULL,
                                               related_name='characters', to='api.subclass')),
            ],
            options={
                'verbose_name': 'character',
                'db_table': 'characters',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Inventory',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('gold', models.PositiveIntegerField(default=0)),
                ('capacity', models.PositiveSmallIntegerField(default=20, validators=[
                    django.core.validators.MinValueValidator(1, message='capacity must be at least 1'),
                ])),
                ('character', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE,
                                                   related_name='inventory', to='api.character')),
            ],
            options={
                'verbose_name': 'inventory',
                'verbose_name_plural': 'inventories',
                'db_table': 'inventories',
            },
        ),
        migrations.CreateModel(
            name='Equipment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('character', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE,
                                                   related_name='equipment', to='api.character')),
            ],
            options={
                'verbose_name': 'equipment',
                'verbose_name_plural': 'equipment',
                'db_table': 'equipment',
            },
        ),
        migrations.CreateModel(
            name='Item',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=100)),
                ('desc', models.TextField(blank=True, default='')),
                ('quantity', models.PositiveIntegerField(default=1, validators=[
                    django.core.validators.MinValueValidator(1, message='Quantity must be at least 1'),
                ])),
                ('inventory', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                                related_name='items', to='api.inventory')),
            ],
            options={
                'verbose_name': 'item',
                'db_table': 'items',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='EquipmentSlot',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('slot_type', models.CharField(choices=[
                    ('HEAD', 'Head'), ('NECK', 'Neck'), ('SHOULDERS', 'Shoulders'), ('CHEST', 'Chest'),
                    ('BACK', 'Back'), ('ARMS', 'Arms'), ('HANDS', 'Hands'), ('WAIST', 'Waist'), ('LEGS', 'Legs'),
                    ('FEET', 'Feet'), ('MAIN_HAND', 'Main Hand'), ('OFF_HAND', 'Off Hand'),
                    ('TWO_HAND', 'Two Hand'), ('RING_1', 'Ring 1'), ('RING_2', 'Ring 2'),
                ], max_length=10)),
                ('equipment', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                                related_name='slots', to='api.equipment')),
                ('item', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE,
                                              related_name='equipment_slot', to='api.item')),
            ],
            options={
                'verbose_name': 'equipment slot',
                'db_table': 'equipment_slots',
                'ordering': ['slot_type'],
                'constraints': [
                    models.UniqueConstraint(fields=('equipment', 'slot_type'), name='unique_slot_per_equipment'),
                ],
            },
        ),
        migrations.CreateModel(
            name='CharacterSpell',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('character', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                                related_name='learned_spells', to='api.character')),
                ('spell', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                            related_name='character_spells', to='api.spell')),
            ],
            options={
                'verbose_name': 'learned spell',
                'db_table': 'character_spells',
                'ordering': ['created_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('character', 'spell'), name='unique_learned_spell'),
                ],
            },
        ),
    ]
