"""
CLI Interface module for Tabsplit
Command-line interface for splitting a restaurant bill
"""

from typing import Optional

from bill_splitter import BillSplitter, describe_total
from data_models import Bill
from errors import BillSplitError
from ocr_processor import ParallelOCRProcessor
from receipt_parser import ReceiptParser
from utils import (
    clean_text_for_display,
    format_currency,
    try_parse_decimal,
    try_parse_int,
    validate_image_path,
    validate_menu_choice,
)


class SplitCLI:
    """Command-line interface for Tabsplit"""

    def __init__(self, bill: Optional[Bill] = None, processor: Optional[ParallelOCRProcessor] = None):
        self.splitter = BillSplitter(bill)
        self.processor = processor or ParallelOCRProcessor()
        self.parser = ReceiptParser()

    @property
    def bill(self) -> Bill:
        return self.splitter.bill

    def _money(self, amount) -> str:
        return format_currency(amount, self.bill.currency)

    def display_banner(self):
        print("\n" + "="*60)
        print("🍽️  TABSPLIT - Restaurant Bill Splitter")
        print("Fair shares with proportional tax & tip")
        print("="*60)

    def process_receipt(self, image_path: str):
        """Scan a receipt image and load its items into the bill"""
        print(f"\n📸 Processing receipt: {image_path}")

        ocr_text = self.processor.process_image_parallel(image_path)
        receipt = self.parser.parse(ocr_text)
        self.processor.metrics.items_detected = len(receipt.items)
        self.splitter.load_receipt(receipt)

        self.display_bill()
        self.display_metrics()

    def display_bill(self):
        """Display the bill items and who shares them"""
        bill = self.bill
        if not bill.items:
            print("\n⚠ No items on the bill")
            return

        print("\n" + "="*50)
        print("📋 BILL ITEMS")
        print("="*50)

        for i, item in enumerate(bill.items, 1):
            names = [p.name for p in bill.people if p.id in item.assigned_to]
            assigned = ', '.join(names) if names else 'Unassigned'
            print(f"{i:2}. {clean_text_for_display(item.name, 30):30} {self._money(item.price):>10} [{assigned}]")
            if item.quantity > 1:
                print(f"    {item.quantity} x {self._money(item.unit_price)}")

        print("-"*50)
        print(f"{'SUBTOTAL:':38} {self._money(bill.subtotal):>10}")
        print(f"{'TAX:':38} {self._money(bill.tax):>10}")
        print(f"{'TIP:':38} {self._money(bill.tip):>10}")
        print(f"{'TOTAL:':38} {describe_total(bill):>10}")

    def display_metrics(self):
        """Display processing metrics"""
        m = self.processor.metrics
        print("\n" + "="*50)
        print("🚀 PROCESSING METRICS")
        print("="*50)
        print(f"Workers Used:      {m.workers_used}")
        print(f"Processing Time:   {m.processing_time:.2f}s")
        print(f"Items Detected:    {m.items_detected}")
        print(f"Regions Processed: {m.regions_processed}")

    def _select(self, entries, prompt: str):
        """Let the user pick one entry from a numbered list, None if invalid"""
        for i, entry in enumerate(entries, 1):
            print(f"{i}. {entry.name}")
        idx = try_parse_int(input(prompt))
        if idx is None or not 1 <= idx <= len(entries):
            print("Invalid selection")
            return None
        return entries[idx - 1]

    def _read_amount(self, prompt: str):
        amount = try_parse_decimal(input(prompt))
        if amount is None:
            print("Invalid amount")
        return amount

    def manage_people(self):
        """Manage people for bill splitting"""
        print("\n" + "="*50)
        print("👥 PEOPLE MANAGEMENT")
        print("="*50)

        while True:
            names = ', '.join(p.name for p in self.bill.people)
            print(f"\nCurrent people: {names or 'None'}")
            print("\n1. Add person")
            print("2. Remove person")
            print("3. Done")

            choice = validate_menu_choice(input("\nChoice: "), ['1', '2', '3']) or ''
            print("-"*50)

            if choice == '1':
                name = input("Enter name: ").strip()
                if name:
                    self.splitter.add_person(name)
                    print(f"✓ Added {name}")
            elif choice == '2':
                if not self.bill.people:
                    print("⚠ No people to remove")
                    continue
                person = self._select(self.bill.people, "Select person number to remove: ")
                if person:
                    self.splitter.remove_person(person.id)
                    print(f"✓ Removed {person.name}")
            elif choice == '3':
                break

    def add_item(self):
        """Add an item typed in by hand"""
        name = input("\nItem name: ").strip()
        if not name:
            print("Item needs a name")
            return
        price = self._read_amount("Price: ")
        if price is None:
            return
        try:
            self.splitter.add_item(name, price)
            print(f"✓ Added {name} ({self._money(price)})")
        except BillSplitError as e:
            print(f"⚠ {e}")

    def assign_items(self):
        """Toggle who shares each item"""
        if not self.bill.items:
            print("\n⚠ No items to assign")
            return
        if not self.bill.people:
            print("\n⚠ No people added yet")
            return

        print("\n" + "="*50)
        print("🔍 ITEM ASSIGNMENT")
        print("="*50)

        for item_id in [item.id for item in self.bill.items]:
            while True:
                item = self.bill.item(item_id)
                names = [p.name for p in self.bill.people if p.id in item.assigned_to]
                print(f"\n{item.name} - {self._money(item.price)}")
                print(f"Shared by: {', '.join(names) if names else 'None'}")
                print("\n1. Assign to everyone")
                print("2. Toggle a person")
                print("3. Next item")

                choice = validate_menu_choice(input("Choice: "), ['1', '2', '3']) or ''
                print("-"*50)

                if choice == '1':
                    self.splitter.assign_to_everyone(item_id)
                    print("✓ Assigned to everyone")
                elif choice == '2':
                    person = self._select(self.bill.people, "Person number: ")
                    if person:
                        self.splitter.toggle(item_id, person.id)
                elif choice == '3':
                    break

    def set_tax(self):
        amount = self._read_amount("\nEnter tax amount: ")
        if amount is None:
            return
        try:
            self.splitter.set_tax(amount)
            print(f"✓ Tax: {self._money(self.bill.tax)}")
        except BillSplitError as e:
            print(f"⚠ {e}")

    def set_tip(self):
        amount = self._read_amount("\nEnter tip amount: ")
        if amount is None:
            return
        try:
            self.splitter.set_tip(amount)
            print(f"✓ Tip: {self._money(self.bill.tip)}")
        except BillSplitError as e:
            print(f"⚠ {e}")

    def display_results(self):
        """Display each person's share"""
        if not self.bill.people:
            print("\n⚠ No people added yet")
            return

        print("\n" + "="*50)
        print("💰 SPLIT RESULTS")
        print("="*50)

        for row in self.splitter.breakdown():
            print(f"\n{row.name:20} {self._money(row.total):>10}")
            print(f"  Items:     {self._money(row.item_share):>10}")
            print(f"  Tax & Tip: {self._money(row.tax_tip_share):>10}")

        print("\n" + "-"*50)
        print(f"{'Total Bill':20} {describe_total(self.bill):>10}")

        unassigned = [item.name for item in self.bill.items if not item.assigned_to]
        if unassigned:
            print(f"\n⚠ {len(unassigned)} unassigned item(s) nobody pays for: {', '.join(unassigned)}")
            print(f"  Uncovered: {self._money(self.splitter.unallocated())}")

    def share_details(self):
        print("\n" + self.splitter.summary())

    def new_bill(self):
        self.splitter.new_bill()
        print("\n✓ Started a new bill split")

    def run(self):
        """Run the CLI application"""
        self.display_banner()

        actions = {
            '2': self.add_item,
            '3': self.manage_people,
            '4': self.assign_items,
            '5': self.set_tax,
            '6': self.set_tip,
            '7': self.display_results,
            '8': self.share_details,
            '9': self.new_bill,
        }

        while True:
            print("\n" + "="*50)
            print("MAIN MENU")
            print("="*50)
            print("1. Scan receipt image")
            print("2. Add item")
            print("3. Manage people")
            print("4. Assign items to people")
            print("5. Set tax")
            print("6. Set tip")
            print("7. Show split results")
            print("8. Share split details")
            print("9. New bill split")
            print("0. Exit")

            choice = input("\nChoice: ").strip()

            if choice == '1':
                image_path = input("Enter image path: ").strip()
                if validate_image_path(image_path):
                    self.process_receipt(image_path)
                else:
                    print("⚠ Invalid or unsupported image")
            elif choice in actions:
                actions[choice]()
            elif choice == '0':
                print("\n👋 Thank you for using Tabsplit!")
                break
