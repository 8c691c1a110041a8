"""
HiddenHeu Backend — Sample Data
=================================

What:  The fixed categories, cities, places and testimonials every fresh
       store starts with.
When:  Loaded once by MemStorage(seed=True). Loading order matters: places
       reference cities and categories by the ids they receive here
       (categories 1–5, cities 1–6), so the lists must not be reordered.
"""

from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from hiddenheu.storage import MemStorage


SAMPLE_CATEGORIES: List[Dict[str, Any]] = [
    {
        "name": "Hidden Food Places",
        "description": "Local eateries & cuisines",
        "icon": "fa-utensils",
        "color_class": "amber",
    },
    {
        "name": "Local Lifestyle",
        "description": "Authentic daily experiences",
        "icon": "fa-hands",
        "color_class": "green",
    },
    {
        "name": "Cultural Clothing",
        "description": "Traditional attires & crafts",
        "icon": "fa-tshirt",
        "color_class": "purple",
    },
    {
        "name": "Historical Spots",
        "description": "Monuments & heritage sites",
        "icon": "fa-monument",
        "color_class": "blue",
    },
    {
        "name": "Nature Trails",
        "description": "Scenic routes & landscapes",
        "icon": "fa-tree",
        "color_class": "emerald",
    },
]

SAMPLE_CITIES: List[Dict[str, Any]] = [
    {
        "name": "Delhi",
        "state": "Delhi",
        "description": "Discover ancient bazaars, historical monuments, and secret gardens in India's capital city.",
        "image_url": "https://images.unsplash.com/photo-1587474260584-136574528ed5",
        "rating": 45,
        "latitude": "28.6139",
        "longitude": "77.2090",
    },
    {
        "name": "Mumbai",
        "state": "Maharashtra",
        "description": "Experience hidden beaches, local eateries, and vibrant street culture in the city of dreams.",
        "image_url": "https://images.unsplash.com/photo-1570168007204-dfb528c6958f",
        "rating": 40,
        "latitude": "19.0760",
        "longitude": "72.8777",
    },
    {
        "name": "Jaipur",
        "state": "Rajasthan",
        "description": "Uncover the secrets of the Pink City with hidden palaces, artisan workshops, and royal cuisine.",
        "image_url": "https://images.unsplash.com/photo-1599661046289-e31897846e41",
        "rating": 47,
        "latitude": "26.9124",
        "longitude": "75.7873",
    },
    {
        "name": "Bangalore",
        "state": "Karnataka",
        "description": "Explore tech hubs alongside traditional markets and lush gardens in the Silicon Valley of India.",
        "image_url": "https://images.unsplash.com/photo-1580667309005-9e5cffe54318",
        "rating": 43,
        "latitude": "12.9716",
        "longitude": "77.5946",
    },
    {
        "name": "Chennai",
        "state": "Tamil Nadu",
        "description": "Discover rich cultural heritage, hidden temples, and authentic South Indian cuisine.",
        "image_url": "https://images.unsplash.com/photo-1582510003544-4d00b7f74220",
        "rating": 42,
        "latitude": "13.0827",
        "longitude": "80.2707",
    },
    {
        "name": "Kolkata",
        "state": "West Bengal",
        "description": "Explore colonial architecture, hidden bookstores, and authentic Bengali cuisine in the City of Joy.",
        "image_url": "https://images.unsplash.com/photo-1558431382-27e303142255",
        "rating": 41,
        "latitude": "22.5726",
        "longitude": "88.3639",
    },
]

SAMPLE_PLACES: List[Dict[str, Any]] = [
    {
        "name": "Paranthe Wali Gali",
        "description": "Experience Delhi's most authentic stuffed bread variations in this hidden lane of Old Delhi.",
        "address": "Old Delhi, Delhi",
        "city_id": 1,  # Delhi
        "category_id": 1,  # Food
        "image_url": "https://images.unsplash.com/photo-1601050690597-df0568f70950",
        "latitude": "28.6562",
        "longitude": "77.2410",
        "rating": 48,
        "is_featured": True,
        "tags": ["street food", "breakfast", "local favorite"],
    },
    {
        "name": "Rajasthani Heritage Textiles",
        "description": "Discover artisanal block printing techniques and handloom fabrics from master craftsmen.",
        "address": "Bapu Bazaar, Jaipur",
        "city_id": 3,  # Jaipur
        "category_id": 3,  # Clothing
        "image_url": "https://images.unsplash.com/photo-1583391733956-3750e0ff4e8b",
        "latitude": "26.9186",
        "longitude": "75.8222",
        "rating": 40,
        "is_featured": True,
        "tags": ["handloom", "traditional", "crafts"],
    },
    {
        "name": "Jog Falls Hidden Path",
        "description": "An off-the-beaten-path trail to witness India's second-highest waterfall from a secluded viewpoint.",
        "address": "Shimoga, Karnataka",
        "city_id": 4,  # Bangalore, nearest major city
        "category_id": 5,  # Nature
        "image_url": "https://images.unsplash.com/photo-1598233847491-f16487adee2f",
        "latitude": "14.2241",
        "longitude": "74.7938",
        "rating": 46,
        "is_featured": True,
        "tags": ["waterfall", "hiking", "scenic"],
    },
    {
        "name": "Paigah Tombs",
        "description": "A hidden necropolis with exquisite marble inlay work and Indo-Islamic architecture away from tourist crowds.",
        "address": "Old City, Hyderabad",
        "city_id": 4,  # Hyderabad is not a seeded city; filed under Bangalore
        "category_id": 4,  # Historical
        "image_url": "https://images.unsplash.com/photo-1524613032530-449a5d94c285",
        "latitude": "17.3615",
        "longitude": "78.4747",
        "rating": 49,
        "is_featured": True,
        "tags": ["historical", "architecture", "hidden gem"],
    },
    {
        "name": "Khari Baoli Spice Market",
        "description": "Asia's largest wholesale spice market offering a sensory overload of colors and aromas.",
        "address": "Chandni Chowk, Delhi",
        "city_id": 1,  # Delhi
        "category_id": 2,  # Lifestyle
        "image_url": "https://images.unsplash.com/photo-1566123628941-963b11f35bdb",
        "latitude": "28.6579",
        "longitude": "77.2200",
        "rating": 44,
        "is_featured": False,
        "tags": ["market", "spices", "shopping"],
    },
    {
        "name": "Dharavi Pottery Colony",
        "description": "Meet skilled artisans creating beautiful pottery in the heart of Mumbai's largest informal settlement.",
        "address": "Dharavi, Mumbai",
        "city_id": 2,  # Mumbai
        "category_id": 2,  # Lifestyle
        "image_url": "https://images.unsplash.com/photo-1604847369696-c361b95e2fac",
        "latitude": "19.0399",
        "longitude": "72.8476",
        "rating": 43,
        "is_featured": False,
        "tags": ["crafts", "pottery", "local artisans"],
    },
]

SAMPLE_TESTIMONIALS: List[Dict[str, Any]] = [
    {
        "name": "Rahul P.",
        "location": "Mumbai, Maharashtra",
        "comment": (
            "Thanks to HiddenHeu, I discovered an amazing food street in Old Delhi that wasn't on "
            "any major travel site. The voice guide feature explained the history of each dish in "
            "my language, making it a truly immersive experience."
        ),
        "rating": 50,
        "avatar_initials": "RP",
    },
    {
        "name": "Ananya K.",
        "location": "Bangalore, Karnataka",
        "comment": (
            "The hidden nature trail near Munnar that this app recommended was breathtaking! It "
            "wasn't crowded like other tourist spots, and we felt like we discovered a secret "
            "paradise. The navigation feature made it easy to find."
        ),
        "rating": 45,
        "avatar_initials": "AK",
    },
    {
        "name": "Vikram S.",
        "location": "Delhi, NCR",
        "comment": (
            "I visited Jaipur many times but never knew about the traditional textile workshop "
            "that HiddenHeu recommended. The artisans showed us ancient block printing techniques, "
            "and I bought authentic souvenirs directly from them."
        ),
        "rating": 50,
        "avatar_initials": "VS",
    },
]


def load_sample_data(store: "MemStorage") -> None:
    """Insert the sample rows through the store's normal create methods."""
    for category in SAMPLE_CATEGORIES:
        store.create_category(category)
    for city in SAMPLE_CITIES:
        store.create_city(city)
    for place in SAMPLE_PLACES:
        store.create_place(place)
    for testimonial in SAMPLE_TESTIMONIALS:
        store.create_testimonial(testimonial)
