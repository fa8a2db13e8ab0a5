from django.conf import settings
from django.core.management.base import BaseCommand, CommandError, CommandParser


class Command(BaseCommand):
    help = "List the scheduled jobs and the cron expressions that trigger them"

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            "--cron",
            default=None,
            help="Only list jobs triggered by this cron expression.",
        )

    def handle(self, *args, **options):
        schedule = settings.SCHEDULED_TASKS
        cron = options["cron"]

        if cron is not None:
            if cron not in schedule:
                raise CommandError(f"No jobs scheduled for '{cron}'")
            schedule = {cron: schedule[cron]}

        for expr, jobs in schedule.items():
            for job in jobs:
                self.stdout.write(f"{expr}\t{job}")
