"""Service layer. All public operations return ServiceResult."""
