from inquiro.services.auth_service import AuthService, AuthError
from inquiro.services.user_service import UserService, UserServiceError, RegistrationError
from inquiro.services.survey_service import SurveyService
from inquiro.services.question_service import QuestionService
from inquiro.services.response_service import ClientInfo, ResponseService
from inquiro.services.token_service import SurveyTokenService

# AI services
from inquiro.services.ai import AIServiceUnavailableError, SurveyGenerationError, SurveyGenerator
