import pytest

from studyassist.database.repositories.profiles_repository import ProfilesRepository


@pytest.mark.integration
class TestProfilesRepository:
    def test_defaults_to_english(self, user_id: str) -> None:
        assert ProfilesRepository().get_preferred_language(user_id) == "en"

    def test_update_is_an_upsert(self, user_id: str) -> None:
        repo = ProfilesRepository()
        repo.update_preferred_language(user_id, "hi")
        assert repo.get_preferred_language(user_id) == "hi"
        repo.update_preferred_language(user_id, "ja")
        assert repo.get_preferred_language(user_id) == "ja"
