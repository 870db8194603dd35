"""
Print the leveling curve.

Usage:
    python manage.py leveling_curve [--up-to 100] [--step 10]
"""

from django.core.management.base import BaseCommand

from apps.xp import leveling


class Command(BaseCommand):
    help = 'Print XP requirements per level and the curve milestones'

    def add_arguments(self, parser):
        parser.add_argument('--up-to', type=int, default=100, help='Highest level to print')
        parser.add_argument('--step', type=int, default=10, help='Print every Nth level')

    def handle(self, *args, **options):
        step = max(1, options['step'])

        self.stdout.write(f"{'Level':>6} {'XP for level':>14} {'Total XP':>12}")
        for level in range(1, options['up_to'] + 1):
            if level != 1 and level % step:
                continue
            self.stdout.write(
                f"{level:>6} {leveling.xp_for_level(level):>14,} "
                f"{leveling.total_xp_for_level(level):>12,}"
            )

        self.stdout.write('')
        self.stdout.write('Milestones:')
        for level, total in leveling.LEVEL_MILESTONES.items():
            self.stdout.write(f"  Level {level}: {total:,} XP")

        self.stdout.write('')
        self.stdout.write(self.style.SUCCESS(
            f"Recommended daily XP to reach level 100: {leveling.recommended_daily_xp():,}"
        ))
