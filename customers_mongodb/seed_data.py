# seed_data.py

SAMPLE_CUSTOMERS = [
    {
        "name": "Juan Pérez",
        "email": "juan.perez@email.com",
        "address": {"street": "Calle Mayor 123", "city": "Madrid", "country": "Spain"},
    },
    {
        "name": "María García",
        "email": "maria.garcia@email.com",
        "address": {"street": "Av. Libertador 456", "city": "Buenos Aires", "country": "Argentina"},
    },
    {
        "name": "Carlos Rodríguez",
        "email": "carlos.rodriguez@email.com",
        "address": {"street": "Rua das Flores 789", "city": "São Paulo", "country": "Brazil"},
    },
    {
        "name": "Ana Martínez",
        "email": "ana.martinez@email.com",
        "address": {"street": "Paseo de la Reforma 321", "city": "Ciudad de México", "country": "Mexico"},
    },
    {
        "name": "Luis González",
        "email": "luis.gonzalez@email.com",
        "address": {"street": "Carrera 7 #45-67", "city": "Bogotá", "country": "Colombia"},
    },
    {
        "name": "Carmen López",
        "email": "carmen.lopez@email.com",
        "address": {"street": "Gran Vía 890", "city": "Barcelona", "country": "Spain"},
    },
    {
        "name": "Roberto Silva",
        "email": "roberto.silva@email.com",
        "address": {"street": "Av. Paulista 1234", "city": "São Paulo", "country": "Brazil"},
    },
    {
        "name": "Elena Fernández",
        "email": "elena.fernandez@email.com",
        "address": {"street": "Av. Colón 567", "city": "Córdoba", "country": "Argentina"},
    },
    {
        "name": "Miguel Torres",
        "email": "miguel.torres@email.com",
        "address": {"street": "Av. Insurgentes 890", "city": "Guadalajara", "country": "Mexico"},
    },
    {
        "name": "Isabel Ruiz",
        "email": "isabel.ruiz@email.com",
        "address": {"street": "Calle 72 #10-34", "city": "Medellín", "country": "Colombia"},
    },
]
