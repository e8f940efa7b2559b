from datetime import date

from conftest import FakeStore
from factories import GenerationContextFactory, TaggingSettingsFactory
from tagging import preview as preview_module
from tagging.generator import TagGenerator
from tagging.preview import preview_tag_number, preview_tag_numbers

TODAY = date(2024, 3, 15)


def test_preview_starts_at_next_number():
    settings = TaggingSettingsFactory(next_number=5)
    assert preview_tag_numbers(settings) == ["COW-005", "COW-006", "COW-007"]


def test_preview_explicit_start_and_count():
    settings = TaggingSettingsFactory(tag_prefix="HF")
    assert preview_tag_numbers(settings, starting_number=10, count=2) == ["HF-010", "HF-011"]


def test_preview_custom_format_with_context():
    settings = TaggingSettingsFactory(custom=True, custom_format="{SOURCE}-{BREED:2}-{NUMBER:3}")
    ctx = GenerationContextFactory(animal_data={"breed": "angus"})
    assert preview_tag_numbers(settings, ctx, 1, 1, today=TODAY) == ["BC-AN-001"]


def test_preview_never_touches_the_store(clock):
    store = FakeStore(TaggingSettingsFactory(next_number=3), next_number=3)
    settings = store.get_tagging_settings("farm-1")
    first = preview_tag_numbers(settings, count=5, today=TODAY)
    second = preview_tag_numbers(settings, count=5, today=TODAY)
    assert first == second
    assert store.settings_calls == 1
    assert store.increments == 0
    assert store.exists_calls == 0
    assert store.next_number == 3

    # the counter was left alone, so a real generation yields the first preview
    generated = TagGenerator(store, clock=clock).generate_tag("farm-1")
    assert generated.tag_number == first[0] == "COW-003"
    assert store.increments == 1


def test_zero_count_gives_empty_list():
    assert preview_tag_numbers(TaggingSettingsFactory(), count=0) == []


def test_failed_preview_falls_back_to_sequential(monkeypatch):
    class Broken:
        def build(self, *args, **kwargs):
            raise RuntimeError("broken")

    monkeypatch.setattr(preview_module, "strategy_for", lambda _system: Broken())
    assert preview_tag_number(TaggingSettingsFactory(tag_prefix="HF"), number=4) == "HF-004"
