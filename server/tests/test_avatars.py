from constants.avatars import PROFILE_IMAGES, SPOOKY_SYMBOLS, profile_image_for, random_symbol


def test_profile_image_is_deterministic():
    assert profile_image_for("Alice") == profile_image_for("Alice")
    assert profile_image_for("Alice") in PROFILE_IMAGES


def test_profile_images_spread_across_catalog():
    images = {profile_image_for(f"player{i}") for i in range(200)}
    assert len(images) > 1


def test_random_symbol_from_catalog():
    assert random_symbol() in SPOOKY_SYMBOLS
