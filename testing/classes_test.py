import pytest
from django.urls import reverse
from rest_framework import status

from api.models import CharacterClass, Subclass

pytestmark = pytest.mark.django_db

WIZARD = {
    "name": "Wizard",
    "desc": "A scholarly magic-user capable of manipulating the structures of reality.",
    "hitDie": 6,
    "primaryAbility": "INTELLIGENCE",
    "savingThrows": ["INTELLIGENCE", "WISDOM"],
    "spellcasting": True,
}


class TestClassValidation:

    def test_create_class(self, client):
        response = client.post(reverse("class-list"), WIZARD)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["hitDie"] == 6
        assert response.data["savingThrows"] == ["INTELLIGENCE", "WISDOM"]
        assert response.data["subclasses"] == []

    def test_spellcasting_defaults_to_false(self, client):
        payload = {key: value for key, value in WIZARD.items() if key != "spellcasting"}
        response = client.post(reverse("class-list"), payload)
        assert response.data["spellcasting"] is False

    @pytest.mark.parametrize("missing", ["name", "desc", "hitDie", "primaryAbility", "savingThrows"])
    def test_required_fields(self, client, missing):
        payload = {key: value for key, value in WIZARD.items() if key != missing}

        response = client.post(reverse("class-list"), payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert missing in response.data["errors"]

    def test_invalid_hit_die(self, client):
        response = client.post(reverse("class-list"), {**WIZARD, "hitDie": 7})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["errors"]["hitDie"] == ["Invalid hit die value"]

    def test_invalid_abilities(self, client):
        response = client.post(reverse("class-list"), {
            **WIZARD, "primaryAbility": "LUCK", "savingThrows": ["WISDOM", "CHARM"],
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert {"primaryAbility", "savingThrows"} <= set(response.data["errors"])

    def test_saving_throws_behave_as_a_set(self, client):
        response = client.post(reverse("class-list"), {**WIZARD, "savingThrows": ["WISDOM", "WISDOM"]})
        assert response.data["savingThrows"] == ["WISDOM"]

    def test_duplicate_name(self, client, wizard):
        response = client.post(reverse("class-list"), WIZARD)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["message"] == "A class with this name already exists."


class TestSubclasses:

    def test_create_with_subclasses(self, client):
        payload = {**WIZARD, "subclasses": [
            {"name": "School of Evocation", "desc": "Elemental effects."},
            {"name": "School of Abjuration", "desc": "Protective wards."},
        ]}

        response = client.post(reverse("class-list"), payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert sorted(sub["name"] for sub in response.data["subclasses"]) == [
            "School of Abjuration", "School of Evocation",
        ]
        assert Subclass.objects.filter(character_class__name="Wizard").count() == 2

    def test_subclass_endpoint(self, client, fighter):
        url = reverse("class-subclasses", kwargs={"pk": fighter.id})

        created = client.post(url, {"name": "Battle Master", "desc": "Tactical manoeuvres."})
        listed = client.get(url)

        assert created.status_code == status.HTTP_201_CREATED
        assert created.data["classId"] == str(fighter.id)
        assert [sub["name"] for sub in listed.data] == ["Battle Master", "Champion"]

    def test_duplicate_subclass_in_class(self, client, fighter):
        url = reverse("class-subclasses", kwargs={"pk": fighter.id})

        response = client.post(url, {"name": "Champion", "desc": "Again."})

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_subclasses_cannot_be_replaced_by_update(self, client, fighter):
        url = reverse("class-detail", kwargs={"pk": fighter.id})
        response = client.put(url, {"subclasses": []})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestClassDeletion:

    def test_delete_unused_class_removes_subclasses(self, client, fighter):
        response = client.delete(reverse("class-detail", kwargs={"pk": fighter.id}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Class deleted successfully"
        assert not Subclass.objects.exists()

    def test_delete_class_in_use_reports_count(self, client, fighter, make_character):
        make_character("Lae'zel")
        make_character("Karlach")

        response = client.delete(reverse("class-detail", kwargs={"pk": fighter.id}))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["message"] == "Cannot delete class while characters are using it"
        assert response.data["charactersCount"] == 2
        assert CharacterClass.objects.filter(pk=fighter.id).exists()
        assert Subclass.objects.filter(character_class=fighter).exists()
