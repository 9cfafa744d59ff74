"""
Tests for the owner pages: search, create, show and edit.
"""

import pytest

from vet_clinic.exceptions import ConcurrentModificationException
from vet_clinic.repositories import Page, PageRequest

OWNER_FORM_TEMPLATE = "owners/createOrUpdateOwnerForm.html"


@pytest.fixture
def owner_form_data():
    return {
        "firstName": "Joe",
        "lastName": "Bloggs",
        "address": "123 Caramel Street",
        "city": "London",
        "telephone": "0131676163",
    }


def page_of(*owners) -> Page:
    return Page(content=list(owners), total_elements=len(owners), page=0, size=5)


class TestFindOwners:
    """Search page and search results."""

    def test_init_find_form(self, client):
        response = client.get("/owners/find")

        assert response.status_code == 200
        assert response.template.name == "owners/findOwners.html"
        assert 'href="/owners/new"' in response.text

    def test_no_match_shows_error(self, client, owner_repository):
        owner_repository.find_by_last_name_starting_with.return_value = Page.empty()

        response = client.get("/owners", params={"lastName": "Unknown Surname"})

        assert response.status_code == 200
        assert response.template.name == "owners/findOwners.html"
        assert response.context["errors"] == {"lastName": ["has not been found"]}
        assert response.context["form"] == {"lastName": "Unknown Surname"}

    def test_single_match_redirects(self, client, owner_repository, detached_owner):
        owner_repository.find_by_last_name_starting_with.return_value = page_of(
            detached_owner
        )

        response = client.get(
            "/owners", params={"lastName": "Frank"}, follow_redirects=False
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/owners/1"
        owner_repository.find_by_last_name_starting_with.assert_awaited_once_with(
            "Frank", PageRequest(page=0, size=5)
        )

    def test_several_matches_are_listed(self, client, owner_repository, owner_builder):
        owners = [owner_builder(owner_id=i, pet_id=i) for i in (1, 2)]
        owner_repository.find_by_last_name_starting_with.return_value = page_of(
            *owners
        )

        response = client.get("/owners", params={"lastName": "Franklin"})

        assert response.status_code == 200
        assert response.template.name == "owners/ownersList.html"
        assert response.context["owners"] == owners
        assert 'href="/owners/2"' in response.text

    def test_blank_last_name_lists_everyone(
        self, client, owner_repository, owner_builder
    ):
        owners = [owner_builder(owner_id=i, pet_id=i) for i in (1, 2, 3)]
        owner_repository.find_all.return_value = page_of(*owners)

        response = client.get("/owners", params={"lastName": ""})

        assert response.status_code == 200
        owner_repository.find_all.assert_awaited_once_with(PageRequest(page=0, size=5))
        owner_repository.find_by_last_name_starting_with.assert_not_awaited()

    def test_page_parameter(self, client, owner_repository, owner_builder):
        owners = [owner_builder(owner_id=i, pet_id=i) for i in (6, 7)]
        owner_repository.find_all.return_value = Page(
            content=owners, total_elements=7, page=1, size=5
        )

        response = client.get("/owners", params={"page": 2})

        assert response.status_code == 200
        owner_repository.find_all.assert_awaited_once_with(PageRequest(page=1, size=5))
        assert response.context["current_page"] == 2
        assert 'href="/owners?lastName=&page=1"' in response.text

    def test_invalid_page_parameter(self, client):
        response = client.get("/owners", params={"page": 0})

        assert response.status_code == 422


class TestCreateOwner:
    """New owner form."""

    def test_init_creation_form(self, client):
        response = client.get("/owners/new")

        assert response.status_code == 200
        assert response.template.name == OWNER_FORM_TEMPLATE
        for name in ("firstName", "lastName", "address", "city", "telephone"):
            assert f'name="{name}"' in response.text
        assert 'type="submit"' in response.text

    def test_process_creation_form_success(
        self, client, owner_repository, owner_form_data
    ):
        response = client.post(
            "/owners/new", data=owner_form_data, follow_redirects=False
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/owners/11"
        saved = owner_repository.save.await_args.args[0]
        assert saved.full_name == "Joe Bloggs"
        assert saved.telephone == "0131676163"

    def test_process_creation_form_has_errors(
        self, client, owner_repository, owner_form_data
    ):
        owner_form_data.update(lastName="", telephone="not-a-number")

        response = client.post("/owners/new", data=owner_form_data)

        assert response.status_code == 200
        assert response.template.name == OWNER_FORM_TEMPLATE
        assert set(response.context["errors"]) == {"lastName", "telephone"}
        assert response.context["form"]["firstName"] == "Joe"
        owner_repository.save.assert_not_awaited()


class TestShowOwner:
    def test_show_owner(self, client, detached_owner):
        response = client.get("/owners/1")

        assert response.status_code == 200
        assert response.template.name == "owners/ownerDetails.html"
        assert response.context["owner"] is detached_owner
        assert "George Franklin" in response.text
        assert "Leo" in response.text

    def test_show_unknown_owner(self, client):
        response = client.get("/owners/99")

        assert response.status_code == 404
        assert "Owner with id 99 was not found" in response.text


class TestEditOwner:
    """Edit owner form."""

    def test_init_update_form(self, client):
        response = client.get("/owners/1/edit")

        assert response.status_code == 200
        assert response.context["form"] == {
            "firstName": "George",
            "lastName": "Franklin",
            "address": "110 W. Liberty St.",
            "city": "Madison",
            "telephone": "6085551023",
        }

    def test_process_update_form_success(
        self, client, owner_repository, owner_form_data, detached_owner
    ):
        response = client.post(
            "/owners/1/edit", data=owner_form_data, follow_redirects=False
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/owners/1"
        owner_repository.save.assert_awaited_once_with(detached_owner)
        assert detached_owner.id == 1
        assert detached_owner.first_name == "Joe"
        assert [pet.name for pet in detached_owner.pets] == ["Leo"]

    def test_process_update_form_has_errors(
        self, client, owner_repository, owner_form_data, detached_owner
    ):
        owner_form_data["address"] = "   "

        response = client.post("/owners/1/edit", data=owner_form_data)

        assert response.status_code == 200
        assert response.context["errors"] == {"address": ["must not be blank"]}
        assert detached_owner.first_name == "George"
        owner_repository.save.assert_not_awaited()

    def test_concurrent_edit_conflicts(
        self, client, owner_repository, owner_form_data
    ):
        owner_repository.save.side_effect = ConcurrentModificationException(
            entity="Owner", identifier=1
        )

        response = client.post("/owners/1/edit", data=owner_form_data)

        assert response.status_code == 409
        assert response.template.name == "error.html"
