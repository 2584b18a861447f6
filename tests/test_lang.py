import pytest

from novex.lang import Language, Localizer, StringId


def test_default_language_is_english():
    loc = Localizer()
    assert loc.language is Language.EN
    assert loc.get_string(StringId.BOOT_COMPLETE) == "\n=== Boot Complete ===\n"


def test_french_strings():
    loc = Localizer()
    loc.set(Language.FR)
    assert loc.language is Language.FR
    assert loc.get_string(StringId.RESTART) == "Redemarrer"
    assert loc.get_string(StringId.KEYBOARD_OK) == "Clavier OK\n"


def test_set_accepts_plain_int():
    loc = Localizer()
    loc.set(2)
    assert loc.get_string(StringId.SHUTDOWN) == "Eteindre"


@pytest.mark.parametrize("bad", [0, 3, 99])
def test_unknown_language_is_ignored(bad):
    loc = Localizer(Language.FR)
    loc.set(bad)
    assert loc.language is Language.FR


@pytest.mark.parametrize("bad", [10, 99, -1])
def test_unknown_string_id_returns_empty(bad):
    assert Localizer().get_string(bad) == ""


@pytest.mark.parametrize(
    "language, sid, expected",
    [
        (Language.EN, StringId.SELECT_KB, "Press 1 for QWERTY, 2 for AZERTY\n"),
        (
            Language.EN,
            StringId.SELECT_RES,
            "Select Display: 1) Normal (1024x768) 2) HD (1280x720) 3) FHD (1920x1080)\n",
        ),
        (Language.EN, StringId.DESKTOP_BTN, "NovexOS"),
        (Language.EN, StringId.CONSOLE_BTN, "Terminal"),
        (Language.FR, StringId.BOOT_COMPLETE, "\n=== Demarrage Termine ===\n"),
        (Language.FR, StringId.SELECT_KB, "Appuyez sur 1 pour QWERTY, 2 pour AZERTY\n"),
        (
            Language.FR,
            StringId.SELECT_RES,
            "Selectionnez l'ecran: 1) Normal (1024x768) 2) HD (1280x720) 3) FHD (1920x1080)\n",
        ),
        (Language.FR, StringId.DESKTOP_BTN, "Menu"),
        (Language.FR, StringId.CONSOLE_BTN, "Console"),
    ],
)
def test_pinned_strings(language, sid, expected):
    assert Localizer(language).get_string(sid) == expected


def test_shared_strings_identical_in_both_languages():
    en = Localizer(Language.EN)
    fr = Localizer(Language.FR)
    assert en.get_string(StringId.TIMER_OK) == fr.get_string(StringId.TIMER_OK)
    assert en.get_string(StringId.MOUSE_OK) == "Mouse OK\n"
    assert fr.get_string(StringId.MOUSE_OK) == "Souris OK\n"