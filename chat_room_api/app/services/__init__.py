"""
Service layer.

Each service encapsulates the business logic for one concern of the
chat room and receives the shared ``Store`` through its constructor,
so API handlers never touch persistence directly.
"""
