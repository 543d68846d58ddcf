"""
Learned spells: the join between characters and the spells they know.

Endpoints (also mounted under /character-spells):
    GET    /learnedspells                               all learned spells
    GET    /learnedspells/character/{characterId}       spells of one character
    GET    /learnedspells/spells/{characterId}          same, older path
    POST   /learnedspells/learn                         {characterId, spellId}
    DELETE /learnedspells/{characterId}/{spellId}       forget a spell
"""

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from .exceptions import ConflictError
from .mixins import FilteredListMixin, StorageMixin
from .models import Character, CharacterSpell, Spell
from .serializers import CharacterSpellSerializer, LearnSpellSerializer
from .storage import StorageError

logger = logging.getLogger(__name__)


class LearnedSpellViewSet(StorageMixin, FilteredListMixin, GenericViewSet):
    queryset = CharacterSpell.objects.select_related('character', 'spell')
    serializer_class = CharacterSpellSerializer
    entity_label = 'Learned spell'
    filter_fields = {
        'characterId': 'character_id',
        'spellId': 'spell_id',
    }
    sort_fields = {
        'createdAt': 'created_at',
        'spellName': 'spell__name',
        'spellLevel': 'spell__level',
        'characterName': 'character__name',
    }

    @action(detail=False, methods=['get'], url_path=r'character/(?P<character_id>[^/.]+)')
    def by_character(self, request, character_id=None):
        """All spells learned by one character, oldest first."""
        character = self.fetch(Character.objects.all(), label='Character', pk=character_id)
        learned = self.get_queryset().filter(character=character)
        return Response(self.get_serializer(learned, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(request=LearnSpellSerializer, responses=CharacterSpellSerializer)
    @action(detail=False, methods=['post'])
    def learn(self, request):
        """
        Teaches a spell to a character. A known spell is a conflict; otherwise
        the character and the spell must both exist.
        """
        serializer = LearnSpellSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        character_id = serializer.validated_data['characterId']
        spell_id = serializer.validated_data['spellId']

        storage = self.get_storage()
        if storage.exists(CharacterSpell.objects.all(), character_id=character_id, spell_id=spell_id):
            raise ConflictError('Character already knows this spell')

        character = self.fetch(Character.objects.all(), label='Character', pk=character_id)
        spell = self.fetch(Spell.objects.all(), label='Spell', pk=spell_id)

        learned = self.guarded(CharacterSpell.objects.create, character=character, spell=spell)
        logger.info("Character '%s' learned '%s'.", character, spell)
        learned = self.get_queryset().get(pk=learned.pk)
        return Response(self.get_serializer(learned).data, status=status.HTTP_201_CREATED)

    def forget(self, request, character_id=None, spell_id=None):
        """Removes one learned spell; the spell itself stays in the catalogue."""
        try:
            learned = self.get_storage().fetch(self.get_queryset(), character_id=character_id, spell_id=spell_id)
        except StorageError as error:
            raise NotFound('Character has not learned this spell') from error
        self.guarded(self.get_storage().delete, learned)
        logger.info("Character %s forgot spell %s.", character_id, spell_id)
        return Response({'message': 'Spell forgotten successfully'}, status=status.HTTP_200_OK)
