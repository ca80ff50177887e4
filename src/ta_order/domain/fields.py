"""Field-name translation tables between the dashboard and the backend.

Dashboard field names are camelCase. The backend stores snake_case meta
fields, and the two endpoints that patch fields use different names for
the client snapshot:

  PUT /unified-orders/{id}  body {<ORDER_FIELD_MAP[field]>: value}
  PUT /clients/{id}/update  body {"field": CLIENT_FIELD_MAP[field], "value": value}

Codes and ids are deliberately absent from the editable sets: they are
immutable after creation.
"""

# Order fields staff may edit in place
ORDER_EDITABLE_FIELDS: frozenset[str] = frozenset({
    "serviceType",
    "translationType",
    "numberOfPages",
    "languageFrom",
    "languageTo",
    "urgency",
    "specialInstructions",
})

# Client snapshot fields staff may edit in place
CLIENT_EDITABLE_FIELDS: frozenset[str] = frozenset({
    "firstName",
    "lastName",
    "company",
    "phone",
    "email",
    "address",
    "nationalId",
    "serviceType",
})

# Entered with agency-local digits; canonicalized to ASCII before sending
DIGIT_NORMALIZED_FIELDS: frozenset[str] = frozenset({
    "phone",
    "nationalId",
    "numberOfPages",
})

# camelCase → unified-order backend field (PUT /unified-orders/{id})
ORDER_FIELD_MAP: dict[str, str] = {
    "serviceType": "service_type",
    "translationType": "translation_type",
    "documentType": "document_type",
    "numberOfPages": "number_of_pages",
    "languageFrom": "language_from",
    "languageTo": "language_to",
    "urgency": "urgency",
    "specialInstructions": "special_instructions",
    "totalPrice": "total_price",
    "status": "order_status",
    "clientType": "client_type",
    "clientName": "client_name",
    "clientFirstName": "client_first_name",
    "clientLastName": "client_last_name",
    "clientCompany": "client_company",
    "clientPhone": "client_phone",
    "clientEmail": "client_email",
    "clientAddress": "client_address",
    "clientNationalId": "client_national_id",
}

# camelCase → client meta field (PUT /clients/{id}/update)
CLIENT_FIELD_MAP: dict[str, str] = {
    "firstName": "client_first_name",
    "lastName": "client_last_name",
    "company": "client_company",
    "phone": "client_phone",
    "email": "client_email",
    "address": "client_address",
    "nationalId": "client_national_id",
    "serviceType": "service_type",
    "name": "client_name",
    "status": "client_status",
}

# camelCase order field → Order attribute, for patching local state
ORDER_ATTR_MAP: dict[str, str] = {
    "serviceType": "service_type",
    "translationType": "translation_type",
    "documentType": "document_type",
    "numberOfPages": "number_of_pages",
    "languageFrom": "language_from",
    "languageTo": "language_to",
    "urgency": "urgency",
    "specialInstructions": "special_instructions",
    "totalPrice": "total_price",
}

# camelCase client field → Order attribute holding the snapshot copy
CLIENT_ATTR_MAP: dict[str, str] = {
    "firstName": "client_first_name",
    "lastName": "client_last_name",
    "company": "client_company",
    "phone": "client_phone",
    "email": "client_email",
    "address": "client_address",
    "nationalId": "client_national_id",
    "serviceType": "service_type",
}

# Client meta field/value written when an order reaches the archive trigger stage
CLIENT_ARCHIVE_FIELD = CLIENT_FIELD_MAP["status"]
CLIENT_ARCHIVE_VALUE = "archived"
