from io import StringIO

from django.core.management import call_command

from apps.xp import leveling


def test_leveling_curve_prints_milestones():
    out = StringIO()

    call_command('leveling_curve', up_to=20, step=10, stdout=out)

    output = out.getvalue()
    assert 'Milestones:' in output
    assert f"Level 100: {leveling.total_xp_for_level(100):,} XP" in output
    assert f"{leveling.total_xp_for_level(20):>12,}" in output
