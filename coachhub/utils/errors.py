"""
CoachHub API - Error Types and Messages.

Localized user-facing messages and the exception hierarchy for failures
that surface at the HTTP level instead of inside a result envelope.
"""

from typing import Optional


# Localized messages returned in failure envelopes. Store error details are
# logged server-side and never placed in these.
UNAUTHORIZED = "No autorizado"
INVALID_DATA = "Datos inválidos"

ATHLETES_LOAD_FAILED = "Error al cargar atletas"
ATHLETE_DETAILS_LOAD_FAILED = "Error al cargar detalles del atleta"
HISTORY_LOAD_FAILED = "Error al obtener historial"
STATS_LOAD_FAILED = "Error al calcular estadísticas"
PROGRESSION_FAILED = "Error al calcular la progresión"
COACH_STATS_LOAD_FAILED = "Error al cargar estadísticas del coach"

ROUTINES_LOAD_FAILED = "Error al cargar rutinas"
ROUTINE_LOAD_FAILED = "Error al cargar rutina"
ROUTINE_SAVE_FAILED = "Error al guardar rutina"
ROUTINE_DELETE_FAILED = "Error al eliminar rutina"
ROUTINE_ASSIGN_FAILED = "Error al asignar rutina"

EXERCISES_LOAD_FAILED = "Error al cargar ejercicios"
EXERCISE_SAVE_FAILED = "Error al guardar ejercicio"
EXERCISE_DELETE_FAILED = "Error al eliminar ejercicio"

WORKOUT_SAVE_FAILED = "Error al guardar entrenamiento"

NOTIFICATIONS_LOAD_FAILED = "Error al cargar notificaciones"
NOTIFICATION_UPDATE_FAILED = "Error al actualizar notificación"

PROFILE_LOAD_FAILED = "Error al cargar perfil"
PROFILE_UPDATE_FAILED = "Error al actualizar perfil"
COACH_LINK_FAILED = "Error al vincular coach"
COACH_NOT_FOUND = "Coach no encontrado con ese código"
ROLE_UPDATE_FAILED = "Error al actualizar el rol"
SELF_ROLE_CHANGE = "No puedes cambiar tu propio rol"
COACH_UNLINK_FAILED = "Error al desvincular"
USERS_LOAD_FAILED = "Error al cargar usuarios"
ONBOARDING_SAVE_FAILED = "Error al guardar los datos de onboarding"

MEASUREMENTS_SAVE_FAILED = "Error al guardar medidas"
MEASUREMENTS_LOAD_FAILED = "Error al obtener historial de medidas"
MEASUREMENTS_FORBIDDEN = "No autorizado para ver estos datos"

ACTIVITY_LOAD_FAILED = "Error al cargar actividad"
WEEKLY_PROGRESS_FAILED = "Error de progreso"
PERSONAL_RECORDS_FAILED = "Error al cargar PRs"
STRENGTH_PROGRESS_FAILED = "Error al calcular progreso"

SCHEDULE_DAY_TAKEN = "Ya existe una rutina asignada para este día."
SCHEDULE_DAYS_TAKEN = "Existen rutinas asignadas en {count} de los días seleccionados."
SCHEDULE_ASSIGN_FAILED = "Error al asignar rutina"
SCHEDULE_WEEK_ASSIGN_FAILED = "Error en asignación masiva"
SCHEDULE_CONFLICTS_FAILED = "Error al comprobar el calendario"
SCHEDULE_LOAD_FAILED = "Error al cargar calendario"
TODAY_ASSIGNMENT_FAILED = "Error verificando sesión de hoy"

IMAGEKIT_NOT_CONFIGURED = "Configuración de ImageKit no disponible"
UPLOAD_CREDENTIALS_FAILED = "Error al generar credenciales de subida"


class CoachHubException(Exception):
    """
    Base exception class for CoachHub application.

    Data-access functions never raise these across their boundary; they are
    used where a failure must become an HTTP error response.

    Attributes:
        message: Human-readable (localized) error message.
        status_code: HTTP status code for the error.
        detail: Additional error details, for logs only.
    """

    def __init__(
        self,
        message: str = "An error occurred",
        status_code: int = 500,
        detail: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.detail = detail or message
        super().__init__(self.message)


class ConfigurationError(CoachHubException):
    """
    Exception raised when a required setting is absent.

    Used when:
    - The media upload signing key is not configured
    """

    def __init__(
        self,
        message: str = "Configuration unavailable",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=500,
            detail=detail
        )
