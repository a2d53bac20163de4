#!/usr/bin/env python3
"""
Generate an employee hours workbook for trying out the spreadsheet import.

One sheet per month, columns in upload order. A few rows are deliberately
invalid (missing names, zero hours) and one project name matches nothing.
"""

import random
from pathlib import Path

from faker import Faker
from openpyxl import Workbook
from openpyxl.styles import Font

# Initialize Faker
fake = Faker()
Faker.seed(2025)
random.seed(2025)

# Output file
OUTPUT_FILE = Path(__file__).parent / "employee_hours.xlsx"

HEADERS = ["Employee Name", "Project Name", "Rate Per Hour", "Hours", "Total Amount"]

# Spelled the way people type them into spreadsheets
PROJECT_NAMES = [
    "West Horminics",
    "east analytics",
    "North Platform ",
    "Southern Logistics",  # no such project
]

MONTHS = ["January", "February", "March"]


def generate_row(project_name: str) -> list:
    rate = round(random.uniform(12, 25) * 4) / 4
    hours = random.choice([80, 120, 140, 160, 168, 37.5])
    # Leave the amount blank sometimes so the importer computes it
    amount = round(rate * hours, 2) if random.random() < 0.7 else None
    return [fake.name(), project_name, rate, hours, amount]


def generate_invalid_rows() -> list[list]:
    return [
        ["", PROJECT_NAMES[0], 15, 160, None],
        [fake.name(), "", 15, 160, None],
        [fake.name(), PROJECT_NAMES[1], 0, 0, None],
    ]


def build_sheet(ws) -> int:
    ws.append(HEADERS)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    count = 0
    for project_name in PROJECT_NAMES:
        for _ in range(random.randint(1, 4)):
            ws.append(generate_row(project_name))
            count += 1
    for row in generate_invalid_rows():
        ws.append(row)
    return count


def main():
    print("Generating employee hours workbook...")

    wb = Workbook()
    wb.remove(wb.active)
    for month in MONTHS:
        ws = wb.create_sheet(title=month)
        count = build_sheet(ws)
        print(f"  {month}: {count} valid rows")

    wb.save(OUTPUT_FILE)
    print(f"\nWorkbook saved to: {OUTPUT_FILE}")


if __name__ == "__main__":
    main()
