"""
Management command to populate the database with demo data.
"""
from datetime import date, timedelta
import random

from django.core.management.base import BaseCommand
from django.db import transaction

from billing.models import Admission, Department, Doctor, Patient


class Command(BaseCommand):
    help = 'Populate database with demo patients, doctors and admissions'

    def add_arguments(self, parser):
        parser.add_argument('--seed', type=int, default=7, help='random seed for reproducible data')
        parser.add_argument('--admissions', type=int, default=20, help='number of admissions to create')

    @transaction.atomic
    def handle(self, *args, **options):
        rng = random.Random(options['seed'])
        self.stdout.write('Creating demo data...')

        doctors = self.create_doctors()
        patients = self.create_patients(rng)
        self.create_admissions(rng, patients, doctors, options['admissions'])

        self.stdout.write(self.style.SUCCESS('Demo data created.'))

    def create_doctors(self):
        doctors_data = [
            {'name': 'Dr. Alice Heart', 'department': Department.CARDIOLOGY},
            {'name': 'Dr. Brian Synapse', 'department': Department.NEUROLOGY},
            {'name': 'Dr. Carla Onco', 'department': Department.ONCOLOGY},
            {'name': 'Dr. Dan Rapid', 'department': Department.EMERGENCY},
            {'name': 'Dr. Eva Little', 'department': Department.PEDIATRICS},
            {'name': 'Dr. Frank Bones', 'department': Department.ORTHOPEDICS},
            {'name': 'Dr. Grace General', 'department': Department.GENERAL_MEDICINE},
        ]

        doctors = []
        for data in doctors_data:
            doctor, created = Doctor.objects.get_or_create(name=data['name'], defaults={'department': data['department']})
            doctors.append(doctor)
            self.stdout.write(f'Doctor: {doctor}')
        return doctors

    def create_patients(self, rng):
        names = [
            'John Carter', 'Maria Lopez', 'Wei Zhang', 'Aisha Khan', 'Tom Becker',
            'Sofia Rossi', 'Liam Murphy', 'Yuki Tanaka', 'Omar Haddad', 'Nina Petrova',
        ]
        blood_types = [t for t, _ in Patient.BLOOD_TYPE_CHOICES]

        patients = []
        for i, name in enumerate(names):
            patient, created = Patient.objects.get_or_create(
                name=name,
                defaults={
                    'date_of_birth': date(1950, 1, 1) + timedelta(days=rng.randint(0, 365 * 55)),
                    'gender': 'M' if i % 2 == 0 else 'F',
                    'blood_type': rng.choice(blood_types),
                },
            )
            patients.append(patient)
            self.stdout.write(f'Patient: {patient}')
        return patients

    def create_admissions(self, rng, patients, doctors, count):
        reasons = [
            'Chest pain', 'Stroke observation', 'Chemotherapy cycle', 'Fracture',
            'Pneumonia', 'Head injury', 'Appendicitis', 'Dehydration',
        ]
        today = date.today()

        for _ in range(count):
            admitted = today - timedelta(days=rng.randint(1, 60))
            # Roughly one in four patients is still in hospital.
            discharged = None
            if rng.random() > 0.25:
                discharged = min(admitted + timedelta(days=rng.randint(0, 14)), today)
            admission = Admission.objects.create(
                patient=rng.choice(patients),
                doctor=rng.choice(doctors),
                admission_date=admitted,
                discharge_date=discharged,
                reason=rng.choice(reasons),
            )
            self.stdout.write(f'{admission} ({admitted} -> {discharged or "in hospital"})')
