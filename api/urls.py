"""
URL Configuration for the API application (mounted under /api/v1/).

1. RESTful routes for races, classes, spells, weapons, items and characters
   via DefaultRouter.
2. Learned spells, routed under /learnedspells and its alias
   /character-spells.
3. Character-owned inventory and equipment, addressed by the character id.

Paths carry no trailing slash.
"""

from django.urls import path
from rest_framework.routers import DefaultRouter

from .loadout_views import (EquipmentSlotDetailView, EquipmentSlotsView,
                            EquipmentView, InventoryItemDetailView,
                            InventoryItemsView, InventoryView)
from .spellbook_views import LearnedSpellViewSet
from .views import (CharacterClassViewSet, CharacterViewSet, ItemViewSet,
                    RaceViewSet, SpellViewSet, WeaponViewSet)

router = DefaultRouter(trailing_slash=False)
router.register(r'characters', CharacterViewSet, basename='character')
router.register(r'races', RaceViewSet, basename='race')
router.register(r'classes', CharacterClassViewSet, basename='class')
router.register(r'spells', SpellViewSet, basename='spell')
router.register(r'weapons', WeaponViewSet, basename='weapon')
router.register(r'items', ItemViewSet, basename='item')
router.register(r'learnedspells', LearnedSpellViewSet, basename='learnedspell')
router.register(r'character-spells', LearnedSpellViewSet, basename='character-spell')

forget_spell = LearnedSpellViewSet.as_view({'delete': 'forget'})
spells_of_character = LearnedSpellViewSet.as_view({'get': 'by_character'})

loadout_urlpatterns = [
    path('characters/<uuid:character_id>/inventory', InventoryView.as_view(), name='character-inventory'),
    path('characters/<uuid:character_id>/inventory/items', InventoryItemsView.as_view(),
         name='character-inventory-items'),
    path('characters/<uuid:character_id>/inventory/items/<uuid:item_id>', InventoryItemDetailView.as_view(),
         name='character-inventory-item'),
    path('characters/<uuid:character_id>/equipment', EquipmentView.as_view(), name='character-equipment'),
    path('characters/<uuid:character_id>/equipment/slots', EquipmentSlotsView.as_view(),
         name='character-equipment-slots'),
    path('characters/<uuid:character_id>/equipment/slots/<str:slot_type>', EquipmentSlotDetailView.as_view(),
         name='character-equipment-slot'),
]

urlpatterns = [
    *loadout_urlpatterns,
    path('learnedspells/<uuid:character_id>/<uuid:spell_id>', forget_spell, name='learnedspell-forget'),
    path('character-spells/<uuid:character_id>/<uuid:spell_id>', forget_spell, name='character-spell-forget'),
    path('learnedspells/spells/<uuid:character_id>', spells_of_character, name='learnedspell-spells'),
    path('character-spells/spells/<uuid:character_id>', spells_of_character, name='character-spell-spells'),
    *router.urls,
]
