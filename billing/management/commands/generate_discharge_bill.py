from django.core.management.base import BaseCommand, CommandError

from billing.exceptions import BillingError
from billing.services.discharge import confirmation_message, generate_discharge_bill


class Command(BaseCommand):
    help = "Generate the discharge bill for one admission."

    def add_arguments(self, parser):
        parser.add_argument('admission_id', type=int)

    def handle(self, *args, **options):
        admission_id = options['admission_id']
        try:
            bill = generate_discharge_bill(admission_id)
        except BillingError as exc:
            raise CommandError(f'[{exc.default_code}] {exc.detail}') from exc
        self.stdout.write(self.style.SUCCESS(confirmation_message(bill)))
