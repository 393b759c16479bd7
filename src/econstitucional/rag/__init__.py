from .assistant import ConstitutionalAssistant

__all__ = ['ConstitutionalAssistant']
