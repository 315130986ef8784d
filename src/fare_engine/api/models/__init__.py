from .fares import BookingRequest, BookingResponse, FareRequest, QuoteResponse

__all__ = ["BookingRequest", "BookingResponse", "FareRequest", "QuoteResponse"]
