# phl_dashboard/tests/test_navigation.py
# PHL DASHBOARD - NAVIGATION & SETTINGS TESTS

from config import settings


def test_every_navigation_entry_points_at_a_page():
    pages = [item.page for group in settings.NAV_GROUPS for item in group.items]
    assert len(pages) == len(set(pages))
    for page in pages:
        assert (settings.PROJECT_ROOT_DIR / page).is_file(), page


def test_every_page_is_reachable_from_navigation():
    linked = {item.page for group in settings.NAV_GROUPS for item in group.items}
    on_disk = {f"pages/{p.name}" for p in (settings.PROJECT_ROOT_DIR / "pages").glob("[0-9][0-9]_*.py")}
    assert on_disk == linked


def test_runtime_table_names_are_admin_whitelisted():
    runtime_tables = [tab.table for tab in settings.MORTALITY_TABS + settings.WAITING_TIME_TABS]
    assert set(runtime_tables) <= set(settings.ADMIN_TABLES)


def test_bed_groups_cover_codes_one_to_seven():
    assert [g.code for g in settings.BED_GROUPS] == [str(i) for i in range(1, 8)]
