"""API — camada de borda HTTP.

Responsabilidades:
- Receber requests do editor, do simulador e dos quiosques
- Converter corpo bruto em documentos via flowdoc.parse_flow
- Traduzir falhas de domínio em respostas HTTP

Subpastas:
- routes/: endpoints HTTP (health, flows, sessions)

NÃO PODE conter: regras de navegação, validação de campos, geração por IA.
"""
