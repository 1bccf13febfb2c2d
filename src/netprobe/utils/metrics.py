import numpy as np
from sklearn.metrics import accuracy_score, log_loss


class MetricsTracker:
    """Calculate evaluation metrics for the reference oracle."""

    def __init__(self, num_classes: int = 2):
        self.num_classes = num_classes

    def calculate_metrics(self, y_true: np.ndarray, y_prob: np.ndarray) -> dict:
        """
        Calculate loss and accuracy from class probabilities.

        Args:
            y_true: Ground truth labels (N,)
            y_prob: Predicted class probabilities (N, num_classes)

        Returns:
            Dictionary with accuracy and log loss
        """
        labels = list(range(self.num_classes))
        y_pred = y_prob.argmax(axis=1)

        return {
            "accuracy": float(accuracy_score(y_true, y_pred)),
            "loss": float(log_loss(y_true, y_prob, labels=labels)),
        }
