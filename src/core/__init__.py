"""Core: dominio, configuración y servicios del import de modelos."""
