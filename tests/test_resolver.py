from gateway_api.domain.preferences import PreferenceLevel, PreferenceResourceType
from gateway_api.service.preferences import PreferenceService
from gateway_api.service.resolver import PreferenceResolver, compute_source_map, resolve_preferences

COMPUTE = PreferenceResourceType.COMPUTE


def test_user_value_beats_unenforced_gateway_value():
    result = resolve_preferences({"queue": ("normal", False)}, [], {"queue": ("debug", False)})

    assert result.resolved == {"queue": "debug"}
    assert result.sources == {"queue": PreferenceLevel.USER}


def test_enforced_gateway_value_beats_user_value():
    result = resolve_preferences({"queue": ("normal", True)}, [], {"queue": ("debug", False)})

    assert result.resolved == {"queue": "normal"}
    assert result.sources["queue"] is PreferenceLevel.GATEWAY


def test_enforced_group_value_beats_user_value():
    result = resolve_preferences(
        {"queue": ("normal", False)},
        [("chem", {"queue": ("long", True)})],
        {"queue": ("debug", False)},
    )

    assert result.resolved == {"queue": "long"}
    assert result.sources["queue"] is PreferenceLevel.GROUP


def test_enforced_gateway_value_beats_enforced_group_value():
    result = resolve_preferences(
        {"queue": ("normal", True)},
        [("chem", {"queue": ("long", True)})],
        {},
    )

    assert result.resolved == {"queue": "normal"}


def test_group_value_fills_in_when_user_has_none():
    result = resolve_preferences(
        {"queue": ("normal", False), "scratch": ("/scratch", False)},
        [("chem", {"queue": ("long", False)})],
        {"scratch": ("/home/alice", False)},
    )

    assert result.resolved == {"queue": "long", "scratch": "/home/alice"}
    assert result.sources == {"queue": PreferenceLevel.GROUP, "scratch": PreferenceLevel.USER}


def test_first_group_wins_and_conflict_is_reported():
    result = resolve_preferences(
        {},
        [("chem", {"queue": ("long", False)}), ("bio", {"queue": ("gpu", False)})],
        {},
    )

    assert result.resolved == {"queue": "long"}
    assert result.conflict_keys == ["queue"]
    assert [(option.group_id, option.value) for option in result.conflict_options["queue"]] == [
        ("chem", "long"),
        ("bio", "gpu"),
    ]


def test_selection_picks_another_candidate_group():
    result = resolve_preferences(
        {},
        [("chem", {"queue": ("long", False)}), ("bio", {"queue": ("gpu", False)})],
        {},
        {"queue": "bio"},
    )

    assert result.resolved == {"queue": "gpu"}


def test_selection_cannot_override_enforcing_group():
    result = resolve_preferences(
        {},
        [("chem", {"queue": ("long", True)}), ("bio", {"queue": ("gpu", False)})],
        {},
        {"queue": "bio"},
    )

    assert result.resolved == {"queue": "long"}
    assert result.conflict_keys == []


def test_agreeing_groups_are_not_a_conflict():
    result = resolve_preferences(
        {},
        [("chem", {"queue": ("long", False)}), ("bio", {"queue": ("long", False)})],
        {},
    )

    assert result.conflict_keys == []
    assert result.conflict_options == {}


def test_user_value_hides_group_conflict():
    result = resolve_preferences(
        {},
        [("chem", {"queue": ("long", False)}), ("bio", {"queue": ("gpu", False)})],
        {"queue": ("debug", False)},
    )

    assert result.resolved == {"queue": "debug"}
    assert result.conflict_keys == []


def test_no_preferences_resolves_to_empty_map():
    result = resolve_preferences({}, [], {})

    assert result.resolved == {}
    assert result.conflict_keys == []


def test_source_map_prefers_owner_level_on_equal_values():
    sources = compute_source_map(
        {"queue": "normal", "scratch": "/scratch", "project": "abc"},
        PreferenceLevel.USER,
        {"queue": "normal", "project": "xyz"},
        {"queue": "normal", "scratch": "/scratch"},
    )

    assert sources == {
        "queue": PreferenceLevel.USER,
        "scratch": PreferenceLevel.GATEWAY,
        "project": PreferenceLevel.USER,
    }


def test_source_map_for_gateway_owner():
    sources = compute_source_map({"queue": "normal"}, PreferenceLevel.GATEWAY, {}, {"queue": "normal"})

    assert sources == {"queue": PreferenceLevel.GATEWAY}


def test_resolver_reads_all_levels_from_store():
    store = PreferenceService()
    store.set_preference(COMPUTE, "res1", "gw", PreferenceLevel.GATEWAY, "maxWallTime", "60")
    store.set_preference(COMPUTE, "res1", "alice@gw", PreferenceLevel.USER, "maxWallTime", "120")

    resolver = PreferenceResolver()

    assert resolver.resolve(COMPUTE, "res1", "gw", user_id="alice") == {"maxWallTime": "120"}
    assert resolver.resolve(COMPUTE, "res1", "gw") == {"maxWallTime": "60"}


def test_resolver_honours_enforced_gateway_record():
    store = PreferenceService()
    store.set_preference(COMPUTE, "res1", "gw", PreferenceLevel.GATEWAY, "maxWallTime", "60", enforced=True)
    store.set_preference(COMPUTE, "res1", "alice@gw", PreferenceLevel.USER, "maxWallTime", "120")

    assert PreferenceResolver().resolve(COMPUTE, "res1", "gw", user_id="alice@gw") == {"maxWallTime": "60"}


def test_resolver_uses_stored_group_selection():
    store = PreferenceService()
    store.set_preference(COMPUTE, "res1", "chem", PreferenceLevel.GROUP, "preferredBatchQueue", "long")
    store.set_preference(COMPUTE, "res1", "bio", PreferenceLevel.GROUP, "preferredBatchQueue", "gpu")
    resolver = PreferenceResolver()

    before = resolver.resolve_with_conflicts(COMPUTE, "res1", "gw", user_id="alice", group_ids=["chem", "bio"])
    assert before.resolved == {"preferredBatchQueue": "long"}
    assert before.conflict_keys == ["preferredBatchQueue"]

    store.set_group_selection("gw", "alice", COMPUTE, "res1", "preferredBatchQueue", "bio")

    after = resolver.resolve(COMPUTE, "res1", "gw", user_id="alice", group_ids=["chem", "bio"])
    assert after == {"preferredBatchQueue": "gpu"}
    # Another user still gets the first group's value
    assert resolver.resolve(COMPUTE, "res1", "gw", user_id="bob", group_ids=["chem", "bio"]) == {
        "preferredBatchQueue": "long"
    }


def test_resolver_ignores_duplicate_group_ids():
    store = PreferenceService()
    store.set_preference(COMPUTE, "res1", "chem", PreferenceLevel.GROUP, "reservation", "r1")

    result = PreferenceResolver().resolve_with_sources(COMPUTE, "res1", "gw", group_ids=["chem", " chem", ""])

    assert result == {"reservation": PreferenceLevel.GROUP}
