from django.contrib import admin

from .models import (Character, CharacterClass, CharacterSpell, Equipment,
                     EquipmentSlot, Inventory, Item, Race, Spell, Subclass,
                     Weapon)


@admin.register(Race)
class RaceAdmin(admin.ModelAdmin):
    list_display = ('name', 'size', 'speed', 'darkvision', 'playable')
    list_filter = ('size', 'playable', 'darkvision')
    search_fields = ('name',)


class SubclassInline(admin.TabularInline):
    model = Subclass
    extra = 0


@admin.register(CharacterClass)
class CharacterClassAdmin(admin.ModelAdmin):
    """Classes own their subclasses, which are edited inline."""
    list_display = ('name', 'hit_die', 'primary_ability', 'spellcasting')
    list_filter = ('hit_die', 'spellcasting')
    search_fields = ('name',)
    inlines = [SubclassInline]


@admin.register(Subclass)
class SubclassAdmin(admin.ModelAdmin):
    list_display = ('name', 'character_class')
    list_filter = ('character_class',)
    search_fields = ('name',)


@admin.register(Spell)
class SpellAdmin(admin.ModelAdmin):
    list_display = ('name', 'level', 'school', 'concentration')
    list_filter = ('level', 'school', 'concentration')
    search_fields = ('name',)


@admin.register(Weapon)
class WeaponAdmin(admin.ModelAdmin):
    list_display = ('name', 'type', 'damage', 'architype', 'range')
    list_filter = ('architype', 'type', 'two_handed', 'versatile')
    search_fields = ('name',)


@admin.register(Character)
class CharacterAdmin(admin.ModelAdmin):
    """Inventory and equipment are created with the character and edited on their own pages."""
    list_display = ('name', 'level', 'race', 'character_class', 'subclass')
    list_filter = ('race', 'character_class')
    search_fields = ('name',)


class ItemInline(admin.TabularInline):
    model = Item
    extra = 0


@admin.register(Inventory)
class InventoryAdmin(admin.ModelAdmin):
    list_display = ('character', 'gold', 'capacity')
    inlines = [ItemInline]


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ('name', 'quantity', 'inventory')
    search_fields = ('name',)


class EquipmentSlotInline(admin.TabularInline):
    model = EquipmentSlot
    extra = 0


@admin.register(Equipment)
class EquipmentAdmin(admin.ModelAdmin):
    list_display = ('character', 'updated_at')
    inlines = [EquipmentSlotInline]


@admin.register(CharacterSpell)
class CharacterSpellAdmin(admin.ModelAdmin):
    list_display = ('character', 'spell', 'created_at')
    list_filter = ('spell__school',)
    readonly_fields = ('created_at',)
