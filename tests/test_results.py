from sorcerify.services.results import card_info_url, result_row, share_text


class TestResultRow:
    def test_win(self) -> None:
        assert result_row(["correct", "incorrect", "correct"], has_won=True) == "🟩🟥✅"

    def test_loss(self) -> None:
        assert result_row(["correct", "incorrect"], has_won=False) == "🟩❌"

    def test_empty(self) -> None:
        assert result_row([], has_won=False) == ""


class TestShareText:
    def test_daily(self) -> None:
        text = share_text(["incorrect", "correct"], True, "2024-03-09")

        assert text == "Sorcerify 2024-03-09\n🟥✅\nhttps://sorcerify.com"

    def test_without_key(self) -> None:
        assert share_text(["correct"], True, None).startswith("Sorcerify\n")


class TestCardInfoUrl:
    def test_slug(self) -> None:
        assert card_info_url("Apprentice Wizard") == "https://curiosa.io/cards/apprentice_wizard"

    def test_apostrophes_dropped(self) -> None:
        assert card_info_url("Ogre's  Club") == "https://curiosa.io/cards/ogres_club"
        assert card_info_url("Ogre’s Club") == "https://curiosa.io/cards/ogres_club"
