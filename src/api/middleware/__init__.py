"""
API Middleware - Request/response processing

error_handler maps engine exceptions to ErrorResponse JSON.
"""
