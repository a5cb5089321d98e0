"""Service layer for business logic.

Services keep routes, Lambda handlers and the CLI thin: each surface parses
input, calls a service, and maps the result to its own response shape.

Layer hierarchy:
    Routes / Lambda handlers / CLI -> Services -> Repositories (DynamoDB, S3)

Services should:
- Own the issuance and verification workflows
- Orchestrate repositories, the template and the PDF renderer
- Return dataclasses, not response schemas

Services should NOT:
- Call boto3 directly (use repositories)
- Know about HTTP status codes or API Gateway events
"""
