import uuid

import pytest
from django.urls import reverse
from rest_framework import status

from api.models import CharacterSpell, Spell

pytestmark = pytest.mark.django_db


@pytest.fixture
def shield_spell(db):
    return Spell.objects.create(
        name="Shield",
        desc="An invisible barrier of magical force.",
        level=1,
        school="ABJURATION",
        casting_time="1 reaction",
        range="Self",
        components=["V", "S"],
        duration="1 round",
    )


def learn(client, character, spell, basename="learnedspell"):
    return client.post(reverse(f"{basename}-learn"), {
        "characterId": str(character.id),
        "spellId": str(spell.id),
    })


class TestLearnSpell:

    def test_learn(self, client, character, fireball):
        response = learn(client, character, fireball)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["characterId"] == str(character.id)
        assert response.data["spellId"] == str(fireball.id)
        assert response.data["spell"]["name"] == "Fireball"
        assert response.data["character"]["name"] == character.name

    def test_learn_twice(self, client, character, fireball):
        learn(client, character, fireball)

        response = learn(client, character, fireball)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["message"] == "Character already knows this spell"
        assert CharacterSpell.objects.count() == 1

    def test_unknown_character(self, client, fireball):
        response = client.post(reverse("learnedspell-learn"), {
            "characterId": str(uuid.uuid4()),
            "spellId": str(fireball.id),
        })

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["message"] == "Character not found"

    def test_unknown_spell(self, client, character):
        response = client.post(reverse("learnedspell-learn"), {
            "characterId": str(character.id),
            "spellId": str(uuid.uuid4()),
        })

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["message"] == "Spell not found"

    def test_malformed_ids(self, client):
        response = client.post(reverse("learnedspell-learn"), {"characterId": "abc"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert {"characterId", "spellId"} <= set(response.data["errors"])

    def test_alias_route(self, client, character, fireball):
        response = learn(client, character, fireball, basename="character-spell")

        assert response.status_code == status.HTTP_201_CREATED
        assert CharacterSpell.objects.filter(character=character, spell=fireball).exists()


class TestForgetSpell:

    def test_forget(self, client, character, fireball):
        learn(client, character, fireball)
        url = reverse("learnedspell-forget", kwargs={"character_id": character.id, "spell_id": fireball.id})

        response = client.delete(url)
        again = client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Spell forgotten successfully"
        assert again.status_code == status.HTTP_404_NOT_FOUND
        assert again.data["message"] == "Character has not learned this spell"

    def test_forget_keeps_other_spells(self, client, character, fireball, shield_spell):
        learn(client, character, fireball)
        learn(client, character, shield_spell)
        url = reverse("character-spell-forget", kwargs={"character_id": character.id, "spell_id": fireball.id})

        client.delete(url)

        assert list(CharacterSpell.objects.values_list("spell__name", flat=True)) == ["Shield"]
        assert Spell.objects.filter(pk=fireball.pk).exists()


class TestListLearnedSpells:

    def test_spells_of_character(self, client, character, fireball, shield_spell, make_character):
        other = make_character("Gale")
        learn(client, character, fireball)
        learn(client, character, shield_spell)
        learn(client, other, fireball)
        url = reverse("learnedspell-by-character", kwargs={"character_id": character.id})

        response = client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert sorted(entry["spell"]["name"] for entry in response.data) == ["Fireball", "Shield"]

    @pytest.mark.parametrize("route", ["learnedspell-spells", "character-spell-spells"])
    def test_spells_path_lists_the_same_spells(self, client, character, fireball, route):
        learn(client, character, fireball)

        response = client.get(reverse(route, kwargs={"character_id": character.id}))
        missing = client.get(reverse(route, kwargs={"character_id": uuid.uuid4()}))

        assert response.status_code == status.HTTP_200_OK
        assert [entry["spell"]["name"] for entry in response.data] == ["Fireball"]
        assert missing.status_code == status.HTTP_404_NOT_FOUND

    def test_spells_of_unknown_character(self, client):
        url = reverse("learnedspell-by-character", kwargs={"character_id": uuid.uuid4()})

        response = client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["message"] == "Character not found"

    def test_list_is_paginated_and_filterable(self, client, character, fireball, shield_spell, make_character):
        other = make_character("Gale")
        learn(client, character, fireball)
        learn(client, character, shield_spell)
        learn(client, other, fireball)

        everything = client.get(reverse("learnedspell-list"))
        by_spell = client.get(reverse("learnedspell-list"), {"spellId": str(fireball.id), "sortBy": "characterName"})

        assert everything.data["meta"]["total"] == 3
        assert [entry["character"]["name"] for entry in by_spell.data["data"]] == ["Gale", "Lae'zel"]
