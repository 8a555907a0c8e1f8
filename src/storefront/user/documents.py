"""Verification document uploads: may promote the user to premium."""

import structlog
from protean import handle
from protean.fields import Dict, Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class UploadDocuments:
    user_id = Identifier(required=True)
    documents = Dict(required=True)  # {document name: stored file reference}


@storefront.command_handler(part_of=User)
class UploadDocumentsHandler:
    @handle(UploadDocuments)
    def upload_documents(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        previous_role = user.role

        user.upload_documents(command.documents)
        repo.add(user)

        logger.info(
            "Documents uploaded",
            user_id=str(user.id),
            documents=sorted(command.documents),
            role=user.role,
            promoted=user.role != previous_role,
        )
        return user.to_payload()
