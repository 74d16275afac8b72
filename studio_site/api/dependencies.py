from fastapi import Request

from studio_site.services.contact.handler import ContactHandler


def get_contact_handler(request: Request) -> ContactHandler:
    """
    Dependency returning the process-wide contact handler built at startup.

    Tests override this with app.dependency_overrides to inject fakes.
    """
    return request.app.state.contact_handler
