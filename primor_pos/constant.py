"""Editable seed data: users, ingredients, products and complement groups."""

from __future__ import annotations

SYSTEM_USERS: list[dict[str, str]] = [
    {"id": "u1", "username": "admin", "role": "ADMIN", "name": "Gerente Primor"},
    {"id": "u2", "username": "caixa1", "role": "CASHIER", "name": "Operador 01"},
    {"id": "u3", "username": "cozinha1", "role": "KITCHEN", "name": "Chef de Produção"},
]

INGREDIENTS: list[dict[str, str]] = [
    {"id": "i1", "name": "Massa Base", "unit": "KG", "current_stock": "50", "min_stock": "10", "cost_price": "5.50"},
    {"id": "i2", "name": "Frango Desfiado", "unit": "KG", "current_stock": "30", "min_stock": "5", "cost_price": "18.00"},
    {"id": "i3", "name": "Óleo Vegetal", "unit": "LT", "current_stock": "20", "min_stock": "4", "cost_price": "8.00"},
    {"id": "i4", "name": "Embalagem Combo", "unit": "UN", "current_stock": "500", "min_stock": "100", "cost_price": "0.45"},
    {"id": "i5", "name": "Carne Bovina", "unit": "KG", "current_stock": "25", "min_stock": "5", "cost_price": "32.00"},
]

COMPLEMENT_GROUPS: list[dict[str, object]] = [
    {
        "id": "g1",
        "name": "Molhos",
        "min_choices": 0,
        "max_choices": 2,
        "items": [
            {"id": "g1-1", "name": "Catupiry Extra", "price": "2.00"},
            {"id": "g1-2", "name": "Molho de Alho", "price": "1.00"},
            {"id": "g1-3", "name": "Molho Picante", "price": "1.00"},
        ],
    },
    {
        "id": "g2",
        "name": "Bebida do Combo",
        "min_choices": 1,
        "max_choices": 1,
        "items": [
            {"id": "g2-1", "name": "Suco Laranja", "price": "0.00"},
            {"id": "g2-2", "name": "Refrigerante Lata", "price": "1.50"},
        ],
    },
    {
        "id": "g3",
        "name": "Salgados do Combo",
        "min_choices": 2,
        "max_choices": 2,
        "items": [
            {"id": "g3-1", "name": "Coxinha", "price": "0.00"},
            {"id": "g3-2", "name": "Kibe", "price": "0.00"},
            {"id": "g3-3", "name": "Pão de Queijo", "price": "0.00"},
        ],
    },
]

PRODUCTS: list[dict[str, object]] = [
    {
        "id": "p1",
        "name": "Coxinha Suprema",
        "description": "Massa de batata especial com recheio de frango e catupiry.",
        "price": "8.50",
        "category": "FRITOS",
        "image": "https://images.unsplash.com/photo-1626082927389-6cd097cdc6ec",
        "recipe": [("i1", "0.1"), ("i2", "0.05")],
        "complement_group_ids": ["g1"],
    },
    {
        "id": "p2",
        "name": "Combo Galera (100 Salgados)",
        "description": "100 salgados mini variados + 2 Refrigerantes 2L.",
        "price": "119.90",
        "category": "COMBOS",
        "image": "https://images.unsplash.com/photo-1541592106381-b31e9677c0e5",
        "recipe": [("i4", "1")],
        "combo_items": ["50 Mini Coxinhas", "50 Mini Quibes", "2L Coca-Cola", "2L Guaraná"],
    },
    {
        "id": "p3",
        "name": "Kibe com Queijo",
        "description": "Kibe tradicional frito recheado com mussarela argentina.",
        "price": "7.90",
        "category": "FRITOS",
        "image": "https://images.unsplash.com/photo-1606331123988-97bc1b2a7439",
        "recipe": [("i1", "0.1")],
    },
    {
        "id": "p4",
        "name": "Suco Natural Laranja",
        "description": "Suco de laranja 100% natural espremido na hora.",
        "price": "9.00",
        "category": "BEBIDAS",
        "image": "https://images.unsplash.com/photo-1621506289937-a8e4df240d0b",
        "recipe": [],
    },
    {
        "id": "p5",
        "name": "Combo Duplo Snack",
        "description": "2 Salgados Grandes + 1 Suco 300ml.",
        "price": "24.90",
        "category": "COMBOS",
        "image": "https://images.unsplash.com/photo-1565299624946-b28f40a0ae38",
        "recipe": [("i4", "1")],
        "complement_group_ids": ["g3", "g2"],
        "combo_items": ["1 Coxinha", "1 Kibe", "1 Suco Laranja"],
    },
    {
        "id": "p6",
        "name": "Pão de Queijo Mineiro",
        "description": "O verdadeiro pão de queijo com queijo canastra.",
        "price": "4.50",
        "category": "ASSADOS",
        "image": "https://images.unsplash.com/photo-1598143102012-4097b059a7a7",
        "recipe": [("i1", "0.05")],
    },
]
