"""
Evolution API Provider

WhatsApp message and group operations forwarded to an Evolution API
instance. Every handler performs exactly one HTTP call.
"""

import json
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel

from ..config import EvolutionConfig
from ..core.provider import BaseProvider
from ..protocol.errors import ProviderInitError
from ..registry.tools import ToolDefinition, ToolResult, text_result
from ..utils.http_client import HttpClient, describe_http_error
from ..utils.logger import get_logger

logger = get_logger(__name__)


class EvolutionAPIError(Exception):
    """An Evolution API call failed"""


# Validation schemas
class EnviaMensagemArgs(BaseModel):
    number: str
    mensagem: str


class CriaGrupoArgs(BaseModel):
    subject: str
    description: Optional[str] = None
    participants: List[str]


class BuscaGruposArgs(BaseModel):
    getParticipants: bool = False


class BuscaParticipantesGrupoArgs(BaseModel):
    groupJid: str


def _response_body(response: httpx.Response) -> Any:
    """Decoded JSON body, or raw text when the backend did not send JSON"""
    try:
        return response.json()
    except ValueError:
        return response.text


class EvolutionProvider(BaseProvider):
    """Evolution API provider"""

    def __init__(self, config: EvolutionConfig, http_client: Optional[HttpClient] = None):
        super().__init__("evolution", enabled=config.enabled)
        self.config = config

        self.instancia = config.instancia
        self.apikey = config.apikey
        self.api_base = config.api_base

        missing = [
            field_name for field_name in ("instancia", "apikey", "api_base")
            if not getattr(config, field_name)
        ]
        if missing:
            self._disable(f"missing required configuration ({', '.join(missing)})")

        self.http_client = http_client or HttpClient(
            headers=config.default_headers,
            timeout=config.timeout,
            debug_curl=config.debug_curl
        )

        self._register_tools()

    def _build_url(self, path: str) -> str:
        base = (self.api_base or "").rstrip("/")
        if not base.startswith(("http://", "https://")):
            base = f"http://{base}"
        return f"{base}{path}"

    def _register_tools(self):
        self.register_tool(
            "envia_mensagem",
            ToolDefinition(
                name="envia_mensagem",
                description="Envia mensagem de texto via API Evolution",
                input_schema={
                    "type": "object",
                    "properties": {
                        "number": {"type": "string", "description": "Número do destinatário com DDI e DDD"},
                        "mensagem": {"type": "string", "description": "Texto da mensagem a ser enviada"}
                    },
                    "required": ["number", "mensagem"]
                }
            ),
            self._envia_mensagem,
            EnviaMensagemArgs
        )

        self.register_tool(
            "cria_grupo",
            ToolDefinition(
                name="cria_grupo",
                description="Cria um grupo via API Evolution",
                input_schema={
                    "type": "object",
                    "properties": {
                        "subject": {"type": "string", "description": "Nome do grupo"},
                        "description": {"type": "string", "description": "Descrição do grupo"},
                        "participants": {
                            "type": "array",
                            "items": {"type": "string"},
                            "description": "Participantes do grupo (números com DDI/DDD)"
                        }
                    },
                    "required": ["subject", "participants"]
                }
            ),
            self._cria_grupo,
            CriaGrupoArgs
        )

        self.register_tool(
            "busca_grupos",
            ToolDefinition(
                name="busca_grupos",
                description="Busca todos os grupos da instância com opção de listar participantes.",
                input_schema={
                    "type": "object",
                    "properties": {
                        "getParticipants": {
                            "type": "boolean",
                            "description": "Listar participantes dos grupos?",
                            "default": False
                        }
                    },
                    "required": []
                }
            ),
            self._busca_grupos,
            BuscaGruposArgs
        )

        self.register_tool(
            "busca_participantes_grupo",
            ToolDefinition(
                name="busca_participantes_grupo",
                description="Busca participantes específicos de um grupo pela instância.",
                input_schema={
                    "type": "object",
                    "properties": {
                        "groupJid": {"type": "string", "description": "Identificador do grupo"}
                    },
                    "required": ["groupJid"]
                }
            ),
            self._busca_participantes_grupo,
            BuscaParticipantesGrupoArgs
        )

    async def on_initialize(self):
        """Optionally confirm the instance answers before serving"""
        if not self.config.check_connection:
            return

        url = self._build_url(f"/instance/connectionState/{self.instancia}")
        try:
            response = await self.http_client.get(url)
        except httpx.HTTPError as e:
            raise ProviderInitError(self.name, describe_http_error(e)) from e

        logger.info(f"Evolution instance {self.instancia} connection state: {_response_body(response)}")

    async def _envia_mensagem(self, args: Dict[str, Any]) -> ToolResult:
        url = self._build_url(f"/message/sendText/{self.instancia}")

        try:
            response = await self.http_client.post(url, {
                "number": args["number"],
                "text": args["mensagem"]
            })
        except httpx.HTTPError as e:
            logger.error(f"Erro ao enviar mensagem: {describe_http_error(e)}")
            raise EvolutionAPIError(f"Falha ao enviar mensagem: {describe_http_error(e)}") from e

        return text_result(
            f"Mensagem enviada com sucesso para {args['number']}.\n"
            f"Resposta: {json.dumps(_response_body(response), ensure_ascii=False)}"
        )

    async def _cria_grupo(self, args: Dict[str, Any]) -> ToolResult:
        url = self._build_url(f"/group/create/{self.instancia}")

        payload = {"subject": args["subject"], "participants": args["participants"]}
        if args.get("description") is not None:
            payload["description"] = args["description"]

        try:
            response = await self.http_client.post(url, payload)
        except httpx.HTTPError as e:
            logger.error(f"Erro ao criar grupo: {describe_http_error(e)}")
            raise EvolutionAPIError(f"Falha ao criar grupo: {describe_http_error(e)}") from e

        return text_result(
            f"Grupo criado com sucesso!\n"
            f"Resposta: {json.dumps(_response_body(response), ensure_ascii=False)}"
        )

    async def _busca_grupos(self, args: Dict[str, Any]) -> ToolResult:
        url = self._build_url(f"/group/fetchAllGroups/{self.instancia}")
        params = {"getParticipants": "true" if args.get("getParticipants") else "false"}

        try:
            response = await self.http_client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Erro ao buscar grupos: {describe_http_error(e)}")
            raise EvolutionAPIError(f"Falha ao buscar grupos: {describe_http_error(e)}") from e

        return text_result(
            f"Grupos obtidos com sucesso:\n"
            f"{json.dumps(_response_body(response), indent=2, ensure_ascii=False)}"
        )

    async def _busca_participantes_grupo(self, args: Dict[str, Any]) -> ToolResult:
        url = self._build_url(f"/group/participants/{self.instancia}")

        try:
            response = await self.http_client.get(url, params={"groupJid": args["groupJid"]})
        except httpx.HTTPError as e:
            logger.error(f"Erro ao buscar participantes: {describe_http_error(e)}")
            raise EvolutionAPIError(f"Falha ao buscar participantes: {describe_http_error(e)}") from e

        return text_result(
            f"Participantes obtidos com sucesso:\n"
            f"{json.dumps(_response_body(response), indent=2, ensure_ascii=False)}"
        )
