"""
Database build and demo data

Creates the schema, makes sure the bootstrap admin exists and, for an empty
database, inserts a demo catalogue: suppliers, medicines and historical orders.
"""

import random
import re
from datetime import date, timedelta
from decimal import Decimal

from pharma import db, get_config
from pharma.logger import get_logger

logger = get_logger("pharma.build")

SUPPLIER_NAMES = [
    "Global Pharma", "Health Inc.", "MediCorp", "PharmaPlus", "BioHealth",
    "CureAll", "VitalMeds", "DrugWorld", "MediSupply", "PharmAid",
]

MEDICINE_NAMES = [
    "Paracetamol", "Aspirin", "Ibuprofen", "Amoxicillin", "Ciprofloxacin",
    "Metformin", "Lisinopril", "Amlodipine", "Omeprazole", "Simvastatin",
    "Losartan", "Gabapentin", "Sertraline", "Escitalopram", "Albuterol",
    "Prednisone", "Furosemide", "Warfarin", "Clopidogrel", "Atorvastatin",
    "Levothyroxine", "Metoprolol", "Hydrochlorothiazide", "Fluoxetine", "Doxycycline",
    "Azithromycin", "Cephalexin", "Pantoprazole", "Rosuvastatin", "Tamsulosin",
    "Montelukast", "Loratadine", "Cetirizine", "Fexofenadine", "Salbutamol",
    "Budesonide", "Naproxen", "Celecoxib", "Diclofenac", "Meloxicam",
    "Vitamin D", "Folic Acid", "Melatonin", "Insulin", "Heparin",
]

DEMO_SUPPLIER_COUNT = 10
DEMO_MEDICINE_COUNT = 100
DEMO_ORDER_COUNT = 20


def _slug(name):
    return re.sub(r'\W+', '', name.lower())


def ensure_admin_user(config):
    """
    Create the bootstrap admin from ADMIN_USER / ADMIN_PASS if it is missing.

    Returns:
        User or None: the admin, or None when no admin password is configured
    """
    from pharma.data.user import User

    if not config.admin_password:
        logger.warning("ADMIN_PASS not set; no bootstrap admin user created")
        return None

    user = User.query.filter_by(username=config.admin_username).first()
    if user is not None:
        return user

    user = User.from_dict({
        'username': config.admin_username,
        'password': config.admin_password,
        'role': 'admin',
    })
    db.session.add(user)
    db.session.commit()
    logger.info(f"Admin user created: {user.username}")
    return user


def seed_demo_data(rng=None, today=None):
    """
    Insert the demo catalogue. Historical orders carry price snapshots but do
    not draw down stock.

    Returns:
        dict: counts of inserted rows
    """
    from pharma.data.supplier import Supplier
    from pharma.data.medicine import Medicine
    from pharma.data.order import Order, OrderItem, ORDER_STATUS_COMPLETED, ORDER_STATUS_PENDING

    rng = rng or random.Random()
    today = today or date.today()

    suppliers = Supplier.bulk_create_from_dicts([
        {
            'name': name,
            'contact': f"contact@{_slug(name)}.com",
            'email': f"info@{_slug(name)}.com",
        }
        for name in SUPPLIER_NAMES[:DEMO_SUPPLIER_COUNT]
    ])

    medicine_rows = []
    for i in range(DEMO_MEDICINE_COUNT):
        medicine_rows.append({
            'name': f"{MEDICINE_NAMES[i % len(MEDICINE_NAMES)]} {rng.randint(100, 599)}mg",
            'supplier_id': rng.choice(suppliers).id,
            'price': Decimal(rng.randint(100, 5100)) / 100,
            'stock': rng.randint(1, 200),
            'expiry_date': today + timedelta(days=rng.randint(30, 1124)),
        })
    medicines = Medicine.bulk_create_from_dicts(medicine_rows)

    item_count = 0
    for _ in range(DEMO_ORDER_COUNT):
        order = Order(status=ORDER_STATUS_COMPLETED if rng.random() > 0.5 else ORDER_STATUS_PENDING)
        db.session.add(order)
        for _ in range(rng.randint(1, 5)):
            medicine = rng.choice(medicines)
            order.items.append(OrderItem(
                medicine=medicine,
                quantity=rng.randint(1, 10),
                price_at_purchase=medicine.price,
            ))
            item_count += 1

    db.session.commit()
    counts = {
        'suppliers': len(suppliers),
        'medicines': len(medicines),
        'orders': DEMO_ORDER_COUNT,
        'order_items': item_count,
    }
    logger.info(f"Demo data seeded: {counts}")
    return counts


def build_database(app, reset=False, seed_demo=True, rng=None):
    """
    Create tables, the bootstrap admin and (for an empty catalogue) demo data.

    Args:
        app: Flask application
        reset (bool): Drop every table first
        seed_demo (bool): Insert demo data when there are no suppliers yet
        rng (random.Random, optional): Source of randomness for demo data
    """
    from pharma.data.supplier import Supplier

    config = get_config(app)
    with app.app_context():
        if reset:
            logger.warning("Dropping all tables")
            db.drop_all()

        logger.info("Creating tables")
        db.create_all()

        ensure_admin_user(config)

        if not seed_demo:
            logger.info("Demo data disabled")
            return None

        if Supplier.query.first() is not None:
            logger.info("Catalogue already populated; skipping demo data")
            return None

        return seed_demo_data(rng=rng)
