# src/strata/core/__init__.py
"""
Core do Strata.

Este pacote contém o modelo canônico da árvore de configuração,
independente de formatos de arquivo e de variáveis de ambiente.

Responsabilidades:
    - Merge Engine: combinar N mapeamentos na ordem recebida
    - Section Tree: navegação por caminho, coerção tipada e defaults
    - Erros tipados, hashing canônico e Event Log de build

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de I/O

Limites explícitos:
    - Não lê arquivos nem o ambiente do processo
    - Não decide quais fontes carregar nem em que ordem
"""
