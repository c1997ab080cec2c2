# src/hdfsconf/core/__init__.py
"""
Core do hdfsconf.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de estado global mutável

Princípios fundamentais:
    - Nenhuma decisão silenciosa: toda regra de derivação é explícita e testada
    - Todo erro de configuração é fatal; não existe modo parcial
    - O sink é o único estado compartilhado, e apenas durante uma derivação
"""
