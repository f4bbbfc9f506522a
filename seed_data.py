# seed_data.py
# Стартовые данные: используются, когда коллекции ещё нет в БД или она не читается.
import copy

from modules.work_orders.models import VehicleType, WorkOrderStatus, default_inspection
from utils import now_iso

VENDORS = [
    {"id": "v1", "name": "WPS", "accountNumber": "12345", "contactPerson": "Gary @ WPS", "freeShippingThreshold": 500},
    {"id": "v2", "name": "Parts Unlimited", "accountNumber": "PU-998", "contactPerson": "Sarah S.", "freeShippingThreshold": 750},
    {"id": "v3", "name": "OEM Honda", "accountNumber": "HOND-001", "contactPerson": "Direct Rep", "freeShippingThreshold": 250},
]

SCHEMATICS = [
    {"id": "s1", "year": "2023", "make": "Honda", "model": "TRX450R", "vehicleType": VehicleType.ATV.value,
     "diagramUrl": "https://images.unsplash.com/photo-1558981403-c5f91cbba527?auto=format&fit=crop&q=80&w=800"},
    {"id": "s2", "year": "2024", "make": "Yamaha", "model": "YZ250F", "vehicleType": VehicleType.BIKE.value,
     "diagramUrl": "https://images.unsplash.com/photo-1591637333184-19aa84b3e01f?auto=format&fit=crop&q=80&w=800"},
]

CUSTOMERS = [
    {
        "id": "c1",
        "name": "Brad Peterson",
        "phone": "555-123-4567",
        "email": "brad.p@example.com",
        "address": "123 Muddy Lane, Offroad City, CO 80111",
        "preferredContact": "Text",
        "lastVisit": "2024-05-15",
        "fleet": [
            {"year": "2023", "make": "Honda", "model": "TRX450R", "vin": "1HFSC57008A000001", "type": VehicleType.ATV.value},
            {"year": "2021", "make": "Polaris", "model": "RZR Turbo S", "vin": "PLRS9938221", "type": VehicleType.ATV.value},
        ],
    },
    {
        "id": "c2",
        "name": "Sarah Miller",
        "phone": "555-987-6543",
        "email": "smiller@fastbikes.com",
        "address": "45 Apex Circle, Sportsville, CA 90210",
        "preferredContact": "Call",
        "lastVisit": "2024-06-01",
        "fleet": [
            {"year": "2024", "make": "Yamaha", "model": "YZ250F", "vin": "YZ250-8839210", "type": VehicleType.BIKE.value},
        ],
    },
]

INVENTORY = [
    {"id": "i1", "partNumber": "15410-MFJ-D01", "description": "Oil Filter (Honda)", "category": "Fluids", "brand": "OEM",
     "preferredVendor": "OEM Honda", "quantityOnHand": 15, "minStock": 5, "unitPrice": 14.95, "binLocation": "Shelf A-4"},
    {"id": "i2", "partNumber": "CPR8EA-9", "description": "NGK Spark Plug", "category": "Electrical", "brand": "OEM",
     "preferredVendor": "WPS", "quantityOnHand": 2, "minStock": 10, "unitPrice": 8.50, "binLocation": "Shelf B-2"},
    {"id": "i3", "partNumber": "TY-120-17", "description": "Front Tire 120/70ZR17", "category": "Tires", "brand": "Aftermarket",
     "preferredVendor": "Parts Unlimited", "quantityOnHand": 4, "minStock": 2, "unitPrice": 189.99, "binLocation": "Rack 1"},
    {"id": "i4", "partNumber": "YUAM3220LB", "description": "YTX20HL Battery", "category": "Electrical", "brand": "Aftermarket",
     "preferredVendor": "WPS", "quantityOnHand": 0, "minStock": 3, "unitPrice": 145.00, "binLocation": "Shelf C-1"},
]


def _work_orders():
    return [
        {
            "id": "1",
            "orderNumber": "WO-1001",
            "customerId": "c1",
            "customerName": "Brad Peterson",
            "phone": "555-123-4567",
            "vin": "1HFSC57008A000001",
            "year": "2023",
            "make": "Honda",
            "model": "TRX450R",
            "vehicleType": VehicleType.ATV.value,
            "customerConcern": "Engine stutters at high RPM. Possible fuel filter issue.",
            "status": WorkOrderStatus.DIAGNOSING.value,
            "notes": [
                {"id": "n1", "timestamp": "2024-05-15 10:30", "author": "Shop Mechanic",
                 "content": "Verified hesitation. Spark plug looks fouled."},
            ],
            "parts": [
                {"id": "p1", "partNumber": "CPR8EA-9", "description": "NGK Spark Plug", "price": 8.50, "quantity": 1},
            ],
            "laborEntries": [
                {"id": "l1", "technician": "Brad", "description": "Diagnostic Test", "hours": 0.5, "rate": 125,
                 "timestamp": "2024-05-15"},
            ],
            "images": ["https://picsum.photos/seed/atv/600/400"],
            "inspection": default_inspection(),
            "createdAt": now_iso(),
        }
    ]


def seed_collections() -> dict:
    """Fresh copy of the baked-in dataset, keyed like the stored collections."""
    return {
        "workOrders": _work_orders(),
        "inventory": copy.deepcopy(INVENTORY),
        "customers": copy.deepcopy(CUSTOMERS),
        "vendors": copy.deepcopy(VENDORS),
        "schematics": copy.deepcopy(SCHEMATICS),
        "partsOrders": [],
        "appointments": [],
    }
