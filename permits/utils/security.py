from fastapi import Request, HTTPException, Depends

from permits.renewals.session import SessionState


def get_session_state(request: Request) -> SessionState:
    # Le cookie ne porte que l'identifiant; les données sont relues depuis app.state.sessions
    return SessionState(request.session, request.app.state.sessions)


def is_authenticated(request: Request) -> bool:
    return get_session_state(request).is_authenticated


def get_current_session(request: Request) -> SessionState:
    state = get_session_state(request)
    if not state.is_authenticated:
        raise HTTPException(status_code=401, detail="Please log in to continue.")
    return state


def require_user(state: SessionState = Depends(get_current_session)) -> SessionState:
    return state
