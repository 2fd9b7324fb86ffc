# barberqueue/data.py

# Static service catalogue: id -> details. Prices in rupees, durations in minutes.
SERVICES = {
    # Haircuts & Styling
    "classic-haircut": {"name": "Classic Haircut", "price": 2660, "duration_minutes": 20, "description": "Basic haircut for men", "category": "Haircuts & Styling"},
    "skin-fade": {"name": "Skin Fade / Taper Fade", "price": 3080, "duration_minutes": 25, "description": "Modern fade styles", "category": "Haircuts & Styling"},
    "crew-buzz": {"name": "Crew Cut / Buzz Cut", "price": 2050, "duration_minutes": 15, "description": "Short crew/buzz cut", "category": "Haircuts & Styling"},
    "scissor-cut": {"name": "Scissor Cut (Traditional)", "price": 3080, "duration_minutes": 25, "description": "Classic scissor haircut", "category": "Haircuts & Styling"},
    "beard-trim": {"name": "Beard Trim", "price": 1640, "duration_minutes": 10, "description": "Beard trimming and shaping", "category": "Haircuts & Styling"},
    "haircut-beard-combo": {"name": "Haircut + Beard Combo", "price": 4100, "duration_minutes": 35, "description": "Complete haircut and beard service", "category": "Haircuts & Styling"},
    "styling-blowdry": {"name": "Styling / Blow-Dry", "price": 1640, "duration_minutes": 10, "description": "Hair styling and blow-dry", "category": "Haircuts & Styling"},
    # Shaves & Grooming
    "hot-towel-shave": {"name": "Hot Towel Shave", "price": 3080, "duration_minutes": 25, "description": "Traditional hot towel shave", "category": "Shaves & Grooming"},
    "head-shave": {"name": "Head Shave (Razor)", "price": 2660, "duration_minutes": 20, "description": "Clean razor head shave", "category": "Shaves & Grooming"},
    "beard-shaping": {"name": "Beard Shaping + Line-Up", "price": 2050, "duration_minutes": 15, "description": "Detailed beard shaping", "category": "Shaves & Grooming"},
    "mustache-trim": {"name": "Mustache Trim", "price": 1020, "duration_minutes": 5, "description": "Mustache trimming", "category": "Shaves & Grooming"},
    # Treatments
    "scalp-massage": {"name": "Scalp Massage & Wash", "price": 1640, "duration_minutes": 15, "description": "Relaxing scalp massage & wash", "category": "Treatments"},
    "hair-color": {"name": "Hair Color (Grey Coverage)", "price": 4100, "duration_minutes": 40, "description": "Grey coverage hair coloring", "category": "Treatments"},
    "beard-dye": {"name": "Beard Dye", "price": 2460, "duration_minutes": 20, "description": "Beard dyeing", "category": "Treatments"},
    "hair-spa": {"name": "Hair Spa / Deep Conditioning", "price": 2260, "duration_minutes": 30, "description": "Deep conditioning hair spa", "category": "Treatments"},
    # Combo Packs
    "gentlemans": {"name": "Gentleman's Package", "price": 5740, "duration_minutes": 60, "description": "Haircut + Beard Trim + Hot Towel Finish", "category": "Combo Packs"},
    "executive": {"name": "Executive Package", "price": 6560, "duration_minutes": 70, "description": "Haircut + Beard Shaping + Hair Wash + Styling", "category": "Combo Packs"},
    "royal-shave-package": {"name": "Royal Shave Package", "price": 7180, "duration_minutes": 75, "description": "Haircut + Hot Towel Shave + Scalp Massage", "category": "Combo Packs"},
    "kings-luxury": {"name": "King's Luxury Package", "price": 8610, "duration_minutes": 90, "description": "Haircut + Beard Trim + Hair Spa + Scalp Massage", "category": "Combo Packs"},
}


def list_services():
    return [{"id": service_id, **details} for service_id, details in SERVICES.items()]
