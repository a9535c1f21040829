"""App — orquestração, runtime de sessões e infraestrutura.

Subpastas:
- bootstrap/: composition root (inicialização, wiring)
- sessions/: sessões vivas de quiosque, registro e enqueue
- infra/: implementações concretas de IO (cliente OpenAI)
- observability/: contexto de logs e métricas

Padrão: app executa; api adapta; ai gera; navigation governa; flowdoc descreve.
"""
